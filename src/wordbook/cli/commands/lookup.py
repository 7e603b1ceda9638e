"""
Look up a word - via API.
"""

import sys

from rich.console import Console

from wordbook.cli import client

console = Console()


def add_subparser(subparsers):
    parser = subparsers.add_parser("lookup", help="Look up a word")
    parser.add_argument("word", help="Word to look up")
    parser.set_defaults(func=run)


def format_result(result: dict) -> list[str]:
    status = result["status"]
    if status == "not_found":
        return [f"✗ No definition for '{result['word']}'"]
    if status != "found":
        return [f"! Definition unavailable for '{result['word']}': {result.get('reason')}"]

    entry = result["entry"]
    star = " ★" if result.get("saved") else ""
    header = f"[bold]{entry['word']}[/bold]{star}"
    if entry.get("pronunciation"):
        header += f"  /{entry['pronunciation']}/"
    lines = [header]
    for i, sense in enumerate(entry["senses"], 1):
        lines.append(f"  {i}. [italic]{sense['partOfSpeech']}[/italic] {sense['text']}")
    for example in entry.get("examples", []):
        lines.append(f"     \"{example}\"")
    return lines


def run(args):
    try:
        result = client.lookup(args.word)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
    for line in format_result(result):
        console.print(line)
