from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .commands import auth as cmd_auth
from .commands import doctor as cmd_doctor
from .commands import match as cmd_match
from .commands import stats as cmd_stats
from .commands import verify as cmd_verify
from .commands._input import read_text
from .config import Settings, load_settings
from .providers.roblox import IdentityClaim, IdentityProviderError
from .verifier import ScreenshotVerifier

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)

    logging.getLogger("PIL").setLevel(logging.WARNING)
    return warn_buffer


def _add_text_source(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Transcript text to search")
    source.add_argument("--text-file", type=Path, help="Read the transcript from this file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Screenshot player verification")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    match_parser = subparsers.add_parser(
        "match", help="Check whether a player name appears in an OCR transcript"
    )
    match_parser.add_argument("name", help="Claimed player name")
    _add_text_source(match_parser)
    match_parser.add_argument(
        "--json", action="store_true", help="Emit machine-readable JSON to stdout"
    )

    stats_parser = subparsers.add_parser(
        "stats", help="Extract the kill count from an OCR transcript"
    )
    _add_text_source(stats_parser)
    stats_parser.add_argument(
        "--threshold", type=int, default=None, help="Override the configured kill threshold"
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Run the full verification against a screenshot"
    )
    verify_parser.add_argument("name", help="Claimed player name")
    verify_parser.add_argument("image", type=Path, help="Screenshot to read")
    verify_parser.add_argument("--username", help="Username confirmed by the identity provider")
    verify_parser.add_argument("--user-id", help="User id confirmed by the identity provider")
    verify_parser.add_argument("--code", help="Authorization code from the provider callback")
    verify_parser.add_argument("--state", help="State returned in the provider callback")
    verify_parser.add_argument(
        "--expected-state", help="State printed by auth-url when the authorization started"
    )
    verify_parser.add_argument(
        "--json", action="store_true", help="Emit machine-readable JSON to stdout"
    )

    auth_parser = subparsers.add_parser(
        "auth-url", help="Start a Roblox authorization for a claimed player"
    )
    auth_parser.add_argument("name", help="Claimed player name")
    auth_parser.add_argument(
        "--json", action="store_true", help="Emit machine-readable JSON to stdout"
    )

    subparsers.add_parser("doctor", help="Run basic config and OCR runtime checks")
    return parser


def _check_verify_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    manual = args.username is not None or args.user_id is not None
    oauth = any(v is not None for v in (args.code, args.state, args.expected_state))
    if manual and oauth:
        parser.error("verify: use either --username/--user-id or --code/--state/--expected-state")
    if manual and not (args.username and args.user_id):
        parser.error("verify: --username and --user-id must be given together")
    if oauth and not (args.code and args.state and args.expected_state):
        parser.error("verify: --code, --state and --expected-state must be given together")


def _resolve_identity(settings: Settings, args: argparse.Namespace) -> Optional[IdentityClaim]:
    if args.code:
        return cmd_auth.complete(
            settings,
            args.name,
            code=args.code,
            returned_state=args.state,
            expected_state=args.expected_state,
        )
    if args.username:
        return IdentityClaim(user_id=args.user_id, username=args.username)
    return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "verify":
        _check_verify_args(parser, args)
    warn_buffer = configure_logging(args.log_level)

    settings, config_path = load_settings(args.config)

    try:
        match args.command:
            case "match":
                transcript = read_text(args.text, args.text_file)
                report = cmd_match.run(settings, args.name, transcript, json_output=args.json)
                return 0 if report.result.matches else 1
            case "stats":
                transcript = read_text(args.text, args.text_file)
                passed = cmd_stats.run(settings, transcript, threshold=args.threshold)
                return 0 if passed else 1
            case "verify":
                identity = _resolve_identity(settings, args)
                verifier = ScreenshotVerifier.create(settings)
                result = cmd_verify.run(
                    verifier,
                    args.name,
                    args.image,
                    identity=identity,
                    json_output=args.json,
                )
                return 0 if result.overall_valid else 1
            case "auth-url":
                cmd_auth.run(settings, args.name, json_output=args.json)
                return 0
            case "doctor":
                report = cmd_doctor.run(settings, config_path=config_path)
                for line in report.checks:
                    print(line)
                return 0 if report.ok else 1
            case _:
                parser.error("Unknown command")
    except IdentityProviderError as exc:
        logger.error("Identity provider: %s", exc)
        return 1
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
