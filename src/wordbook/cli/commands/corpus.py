"""
Corpus commands - local, no server needed.
"""

import sys
from pathlib import Path

from rich import print_json

from wordbook.core.corpus import check_corpus, load_flat_dictionary, split_into_shards, write_shards
from wordbook.core.shard_store import DirectoryShardStore


def add_subparser(subparsers):
    parser = subparsers.add_parser("corpus", help="Build and check shard files")
    corpus_sub = parser.add_subparsers(dest="corpus_command", required=True)

    split_p = corpus_sub.add_parser("split", help="Split a single dictionary JSON into shards")
    split_p.add_argument("source", help="Path to dictionary .json")
    split_p.add_argument("out_dir", help="Directory for shard files")
    split_p.set_defaults(func=corpus_split)

    check_p = corpus_sub.add_parser("check", help="Parse every shard and report")
    check_p.add_argument("corpus_dir", help="Directory of shard files")
    check_p.add_argument("--json", action="store_true", help="Print the report as JSON")
    check_p.set_defaults(func=corpus_check)


def corpus_split(args):
    path = Path(args.source)
    if not path.exists():
        print(f"✗ File not found: {args.source}")
        sys.exit(1)

    try:
        entries = load_flat_dictionary(path)
    except ValueError as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    shards = split_into_shards(entries)
    written = write_shards(shards, Path(args.out_dir))
    total = sum(len(s) for s in shards.values())
    print(f"✓ Wrote {len(written)} shards ({total} words) to {args.out_dir}")


def corpus_check(args):
    store = DirectoryShardStore(args.corpus_dir)
    reports = check_corpus(store, store.available_keys())
    if not reports:
        print(f"✗ No shard files in {args.corpus_dir}")
        sys.exit(1)

    if args.json:
        print_json(data=[r.to_dict() for r in reports])
    else:
        for r in reports:
            if r.ok:
                print(f"✓ {r.key:5} {r.words} words")
            else:
                print(f"✗ {r.key:5} {r.error}")
        print(f"\nTotal: {sum(r.words for r in reports)} words")

    if not all(r.ok for r in reports):
        sys.exit(1)
