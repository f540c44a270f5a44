"""Command line interface for inspecting and editing a termstore root."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .errors import StoreError
from .log_utils import sanitize_field, setup_logging
from .paths import StoreLayout
from .remote.hostkeys import HostKeyStatus, HostKeyStore
from .resources import ResourceTable
from .seed import SeedStore
from .settings import SessionStore

# hostkey-check exit codes
_STATUS_EXIT = {
    HostKeyStatus.MATCH: 0,
    HostKeyStatus.ABSENT: 1,
    HostKeyStatus.MISMATCH: 2,
}


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="termstore", description="Inspect saved sessions, known host keys and the random seed.")
    ap.add_argument("--root", type=str, default=None, help="Storage root (default: $TERMSTORE_HOME or ~/.termstore)")
    ap.add_argument(
        "-r",
        "--resource",
        action="append",
        default=[],
        metavar="'prog.Key: value'",
        help="Fallback value used when a session does not set the key (repeatable)",
    )
    ap.add_argument("-v", "--verbose", action="count", default=0)

    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List saved sessions")

    p = sub.add_parser("show", help="Show a saved session")
    p.add_argument("name")
    p.add_argument("--key", action="append", default=[], help="Only show these keys (resources apply)")

    p = sub.add_parser("set", help="Write a session from KEY=VALUE pairs (replaces it)")
    p.add_argument("name")
    p.add_argument("pairs", nargs="+", metavar="KEY=VALUE")

    p = sub.add_parser("delete", help="Delete a saved session")
    p.add_argument("name")

    for cmd, help_text in (
        ("hostkey-check", "Check a host key (exit 0 match, 1 unknown, 2 MISMATCH)"),
        ("hostkey-add", "Record a host key"),
    ):
        p = sub.add_parser(cmd, help=help_text)
        p.add_argument("hostname")
        p.add_argument("port", type=int)
        p.add_argument("keytype")
        p.add_argument("keydata")

    sub.add_parser("hostkey-list", help="List recorded host keys")
    sub.add_parser("seed-size", help="Print the size of the stored random seed")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    setup_logging(level)

    layout = StoreLayout.at(args.root)
    sessions = SessionStore(layout=layout, resources=ResourceTable.from_strings(args.resource))

    try:
        if args.command == "list":
            with sessions.list_sessions() as names:
                for name in names:
                    print(sanitize_field(name))
            return 0

        if args.command == "show":
            record = sessions.open_for_read(args.name)
            if record is None and not args.key:
                print(f"No such session: {sanitize_field(args.name)}", file=sys.stderr)
                return 1
            try:
                keys = args.key or sorted(record.values)
                for key in keys:
                    value = sessions.read_string(record, key)
                    if value is not None:
                        print(f"{sanitize_field(key)}={sanitize_field(value)}")
            finally:
                sessions.close_for_read(record)
            return 0

        if args.command == "set":
            pairs = []
            for pair in args.pairs:
                key, sep, value = pair.partition("=")
                if not sep or not key:
                    print(f"Expected KEY=VALUE, got {pair!r}", file=sys.stderr)
                    return 2
                pairs.append((key, value))
            with sessions.open_for_write(args.name) as w:
                for key, value in pairs:
                    w.write_string(key, value)
            return 0

        if args.command == "delete":
            sessions.delete(args.name)
            return 0

        hostkeys = HostKeyStore(layout)
        if args.command == "hostkey-check":
            status = hostkeys.verify(args.hostname, args.port, args.keytype, args.keydata)
            print(status.value)
            return _STATUS_EXIT[status]

        if args.command == "hostkey-add":
            hostkeys.store(args.hostname, args.port, args.keytype, args.keydata)
            return 0

        if args.command == "hostkey-list":
            for entry in hostkeys.entries():
                print(f"{sanitize_field(entry.identity)} {sanitize_field(entry.keydata)}")
            return 0

        if args.command == "seed-size":
            chunks: List[bytes] = []
            SeedStore(layout=layout).read(chunks.append)
            print(sum(len(c) for c in chunks))
            return 0
    except StoreError as e:
        print(f"termstore: {e}", file=sys.stderr)
        return 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
