"""
Shard commands - via API.
"""

import sys

from rich import print_json

from wordbook.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("shards", help="Corpus shard residency")
    shard_sub = parser.add_subparsers(dest="shard_command", required=True)

    list_p = shard_sub.add_parser("list", help="Show shard states")
    list_p.set_defaults(func=shards_list)

    pre_p = shard_sub.add_parser("prefetch", help="Load shards ahead of use")
    pre_p.add_argument("keys", nargs="*", help="Shard keys (default: all)")
    pre_p.set_defaults(func=shards_prefetch)

    inv_p = shard_sub.add_parser("invalidate", help="Drop a shard and its cached lookups")
    inv_p.add_argument("key")
    inv_p.set_defaults(func=shards_invalidate)

    stats_p = shard_sub.add_parser("stats", help="Cache and residency stats")
    stats_p.set_defaults(func=shards_stats)


def shards_list(args):
    try:
        for s in client.list_shards():
            icon = "✓" if s["state"] == "resident" else "✗" if s["state"] == "failed" else "○"
            missing = "" if s["available"] else "  (missing)"
            print(f"  {icon} {s['key']:5} {s['state']}{missing}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def shards_prefetch(args):
    try:
        results = client.prefetch(args.keys or None)
        for key, outcome in results.items():
            icon = "✓" if outcome == "ok" else "✗"
            print(f"{icon} {key}: {outcome}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def shards_invalidate(args):
    try:
        result = client.invalidate(args.key)
        print(f"✓ Invalidated {result['shard']} ({result['dropped']} cached lookups dropped)")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def shards_stats(args):
    try:
        print_json(data=client.health())
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
