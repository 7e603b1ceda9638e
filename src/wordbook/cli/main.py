"""
Wordbook CLI.
"""

import argparse

from wordbook.cli.commands import corpus, lookup, shards, vocab
from wordbook.core.config import configure_logging


def main(argv=None):
    parser = argparse.ArgumentParser(prog="wordbook", description="Wordbook CLI")
    parser.add_argument("--log-level", default="WARNING")
    subparsers = parser.add_subparsers(dest="command")

    lookup.add_subparser(subparsers)
    vocab.add_subparser(subparsers)
    shards.add_subparser(subparsers)
    corpus.add_subparser(subparsers)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
