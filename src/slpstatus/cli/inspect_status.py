#!/usr/bin/env python3
"""
Status Response Inspector

Decodes a raw status response read from a file (or stdin) and prints a
summary. Exits non-zero if the payload does not decode.
"""

import sys
from pathlib import Path

from slpstatus.core.errors import DecodeError
from slpstatus.core.status import DecodedStatus, decode_status, encode_status
from slpstatus.utils.text_utils import format_player_count, truncate

USAGE = "Usage: inspect-status [<path-to-status.json> | -] [--json]"


def read_payload(source: str | None) -> str:
    """Read the raw payload from a path, or stdin for None/"-"."""
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def summarize(decoded: DecodedStatus) -> list[str]:
    """Build the human-readable summary lines"""
    status = decoded.status
    lines = [
        f"Version: {status.version.name} (protocol {status.version.protocol})",
        f"Players: {format_player_count(status.players.online, status.players.max)}",
        f"MOTD: {truncate(status.description.to_plain_text())}",
        f"Icon: {'64x64 PNG' if status.icon else 'none'}",
    ]
    for player in status.players.sample:
        lines.append(f"  - {player.name} ({player.id})")

    if decoded.mod_info is None:
        lines.append("Mods: none (vanilla)")
    else:
        lines.append(f"Mods: {len(decoded.mod_info.mod_list)} ({decoded.mod_info.type})")
        for entry in decoded.mod_info.mod_list:
            lines.append(f"  - {entry.mod_id} {entry.version}")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    as_json = "--json" in args
    if as_json:
        args.remove("--json")
    if len(args) > 1 or any(a in ("-h", "--help") for a in args):
        print(USAGE)
        return 2

    try:
        raw = read_payload(args[0] if args else None)
    except (OSError, UnicodeDecodeError) as e:
        print(f"✗ Failed to read payload: {e}", file=sys.stderr)
        return 1

    try:
        decoded = decode_status(raw)
    except DecodeError as e:
        print(f"✗ Decode failed [{e.kind.value}]: {e.message}", file=sys.stderr)
        return 1

    if as_json:
        print(encode_status(decoded))
    else:
        print("✓ Status decoded")
        for line in summarize(decoded):
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
