#!/usr/bin/env python3
"""Watch the chat backend's shared state from the command line.

Checks connectivity, loads the current snapshot and prints every remote
change as it is polled. Optionally runs a dictation session so transcript
updates flow into the channels.

Usage
-----
::

    export CHATSYNC_BASE_URL="http://localhost:5000"
    python scripts/watch_state.py

Options::

    --duration SECONDS   Stop after this many seconds (default: run until Ctrl+C)
    --dictate            Start dictation and feed the transcript into the channels
    --interval SECONDS   Override the shared-state poll interval
    --export-json FILE   Write the final snapshot as JSON
    --export-text FILE   Write the final snapshot as plain text
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from chatsync import ChatSyncClient, ChatSyncConfig, SharedStateSnapshot, StateChange  # noqa: E402
from chatsync.export import export_json, export_text  # noqa: E402


def _format_snapshot(snapshot: SharedStateSnapshot) -> str:
    return "\n".join(
        [
            f"  left:         {snapshot.channel_a_text!r}",
            f"  right:        {snapshot.channel_b_text!r}",
            f"  verification: {snapshot.verification_label}",
            f"  explanation:  {snapshot.explanation}",
        ]
    )


def _print_change(change: StateChange) -> None:
    stamp = change.observed_at.astimezone(UTC).strftime("%H:%M:%S")
    fields = ", ".join(sorted(field.value for field in change.changed_fields))
    print(f"[{stamp}] remote change: {fields}")
    for field in sorted(change.changed_fields, key=lambda f: f.value):
        before = getattr(change.previous, field.value)
        after = getattr(change.current, field.value)
        print(f"  {field.wire_name}: {before!r} -> {after!r}")


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="Print shared-state changes from the chat backend.",
    )
    parser.add_argument("--duration", type=float, help="Stop after this many seconds")
    parser.add_argument("--dictate", action="store_true", help="Run a dictation session while watching")
    parser.add_argument("--interval", type=float, help="Shared-state poll interval in seconds")
    parser.add_argument("--export-json", help="Write the final snapshot as JSON to FILE")
    parser.add_argument("--export-text", help="Write the final snapshot as text to FILE")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides = {"poll_interval": args.interval} if args.interval else {}
    config = ChatSyncConfig.from_env(**overrides)

    async with ChatSyncClient(config, on_state_change=_print_change) as client:
        health = await client.check_connection()
        if not health.connected:
            print(f"Backend at {config.base_url} unreachable: {health.error}", file=sys.stderr)
            return 1
        print(f"Connected to {config.base_url} ({health.latency_ms:.0f} ms)")

        await client.load()
        print(f"Initial state at {datetime.now(UTC).isoformat()}:")
        print(_format_snapshot(client.snapshot()))

        if args.dictate and not await client.start_dictation():
            print("Could not start dictation", file=sys.stderr)

        try:
            if args.duration:
                await asyncio.sleep(args.duration)
            else:
                await asyncio.Event().wait()
        finally:
            if client.transcript_poller.is_active:
                await client.stop_dictation()
            final = client.snapshot()

    print("Final state:")
    print(_format_snapshot(final))
    if args.export_json:
        print(f"JSON written to {export_json(final, args.export_json)}")
    if args.export_text:
        print(f"Text written to {export_text(final, args.export_text)}")
    return 0


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt):
        sys.exit(asyncio.run(main()))
