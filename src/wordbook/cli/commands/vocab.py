"""
Saved-word commands - via API.
"""

import sys

from wordbook.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("vocab", help="Saved words")
    vocab_sub = parser.add_subparsers(dest="vocab_command", required=True)

    # add
    add_p = vocab_sub.add_parser("add", help="Save a word")
    add_p.add_argument("word")
    add_p.set_defaults(func=vocab_add)

    # remove
    rm_p = vocab_sub.add_parser("remove", help="Forget a saved word")
    rm_p.add_argument("word")
    rm_p.set_defaults(func=vocab_remove)

    # list
    list_p = vocab_sub.add_parser("list", help="List saved words")
    list_p.set_defaults(func=vocab_list)

    # has
    has_p = vocab_sub.add_parser("has", help="Check whether a word is saved")
    has_p.add_argument("word")
    has_p.set_defaults(func=vocab_has)


def vocab_add(args):
    try:
        item = client.save_word(args.word)
        print(f"✓ Saved: {item['word']}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def vocab_remove(args):
    try:
        result = client.remove_word(args.word)
        if result["removed"]:
            print(f"✓ Removed: {result['word']}")
        else:
            print(f"○ Not saved: {result['word']}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def vocab_list(args):
    try:
        result = client.list_vocabulary()
        if result.get("warning"):
            print(f"! {result['warning']}")
        if not result["words"]:
            print("No saved words.")
            return
        for item in result["words"]:
            print(f"{item['saved_at'][:19]}  {item['word']}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def vocab_has(args):
    try:
        result = client.has_word(args.word)
        icon = "✓" if result["saved"] else "○"
        print(f"{icon} {result['word']}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
