"""CLI utility to summarize a transcript through a running summarizer server."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

BACKEND_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = BACKEND_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from summarizer_backend.client import (
    ClientShell,
    MessageKind,
    ShellState,
    SummarizerApiClient,
)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Upload a transcript file, generate a summary with custom instructions"
            " and optionally e-mail it."
        )
    )
    parser.add_argument("transcript", type=Path, help="Path to a .txt transcript.")
    parser.add_argument(
        "-p",
        "--prompt",
        required=True,
        help="Summary instructions, e.g. 'Bullet points for executives'.",
    )
    parser.add_argument(
        "--server",
        default="http://localhost:5000",
        help="Base URL of the summarizer server (default: %(default)s).",
    )
    parser.add_argument(
        "--edit-file",
        type=Path,
        help="Replace the generated summary with the contents of this file and save it.",
    )
    parser.add_argument(
        "--share",
        metavar="EMAILS",
        help="Comma-separated recipient addresses to e-mail the summary to.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _report(shell: ClientShell) -> None:
    if shell.status is None:
        return
    stream = sys.stderr if shell.status.kind is MessageKind.ERROR else sys.stdout
    print(f"[{shell.status.kind.value}] {shell.status.text}", file=stream)


def run(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    transcript_path: Path = args.transcript
    if not transcript_path.is_file():
        print(f"Transcript file not found: {transcript_path}", file=sys.stderr)
        return 2

    with SummarizerApiClient(args.server) as api:
        shell = ClientShell(api=api)

        ok = shell.select_file(transcript_path.name, transcript_path.read_bytes())
        _report(shell)
        if not ok or not shell.upload_selected():
            _report(shell)
            return 1
        _report(shell)

        shell.prompt = args.prompt
        if not shell.generate():
            _report(shell)
            return 1
        _report(shell)
        print(f"Meeting #{shell.meeting_id}")
        print(shell.summary)

        if args.edit_file:
            shell.start_edit()
            shell.edit_summary(args.edit_file.read_text(encoding="utf-8"))
            saved = shell.save_edit()
            _report(shell)
            if not saved:
                shell.cancel_edit()
                return 1

        if args.share:
            shell.recipient_emails = args.share
            shared = shell.share()
            _report(shell)
            for result in shell.share_results:
                print(f"  {result['email']}: {result['status']}")
            if not shared:
                return 1

    return 0 if shell.state is ShellState.SUMMARY_READY else 1


if __name__ == "__main__":
    sys.exit(run())
