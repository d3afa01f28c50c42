"""Interactive terminal chat session with optional report export."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from mindcheck.core.app import _configure_logging
from mindcheck.core.config import get_settings
from mindcheck.integrations.providers import SUPPORTED_PROVIDERS, build_inference_client
from mindcheck.integrations.storage import LocalReportStorage, build_report_sink
from mindcheck.services.conversation import ConversationService
from mindcheck.services.export import format_report

COMMANDS_HELP = "Commands: /report to generate a report, /download to save it, /quit to exit."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mindcheck-chat",
        description="Chat with the MindCheck companion from the terminal.",
    )
    parser.add_argument(
        "--provider",
        choices=SUPPORTED_PROVIDERS,
        default=None,
        help="Override INFERENCE_PROVIDER for this session.",
    )
    parser.add_argument(
        "--reports-dir",
        default=None,
        help="Save downloaded reports to this directory instead of the configured storage.",
    )
    return parser


async def run_session(
    service: ConversationService,
    read_line: Callable[[], str | None],
    out: TextIO,
) -> None:
    """Drive ``service`` from lines returned by ``read_line`` until EOF or /quit."""
    await service.start()
    printed = _print_new(service, 0, out)
    print(COMMANDS_HELP, file=out)

    while True:
        line = read_line()
        if line is None:
            break
        command = line.strip()
        if command == "/quit":
            break
        if command == "/report":
            report = await service.generate_report()
            print(format_report(report), file=out)
        elif command == "/download":
            location = await service.download_report()
            if location:
                print(f"Report saved to {location}", file=out)
            elif service.current_report is None:
                print("No report yet. Use /report first.", file=out)
        else:
            await service.send_message(line)
            printed = _print_new(service, printed, out)

        if service.last_error:
            print(f"[error] {service.last_error}", file=out)
            service.clear_error()


def _print_new(service: ConversationService, already_printed: int, out: TextIO) -> int:
    messages = service.messages
    for message in messages[already_printed:]:
        if message.sender == "bot":
            print(f"bot> {message.content}", file=out)
    return len(messages)


def _read_stdin() -> str | None:
    try:
        return input("you> ")
    except EOFError:
        return None


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.provider:
        settings = settings.model_copy(update={"inference_provider": args.provider})
    _configure_logging(settings.log_level)

    sink = LocalReportStorage(args.reports_dir) if args.reports_dir else build_report_sink(settings)
    service = ConversationService(build_inference_client(settings), settings, report_sink=sink)
    asyncio.run(run_session(service, _read_stdin, sys.stdout))


if __name__ == "__main__":
    main()
