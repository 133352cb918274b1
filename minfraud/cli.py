"""Command-line entry point for scoring a single transaction.

Usage:
    python -m minfraud --ip 81.2.69.160 --email buyer@example.com --country GB
    python -m minfraud --ip 81.2.69.160 --license-key XXXX --requested-type premium
"""

import argparse
import sys

import pydantic
import structlog

from .config import Settings, settings
from .errors import MinfraudError
from .models import RiskSummary
from .request import RequestSubmitter
from .shared.logging import setup_logging
from .transaction import Transaction

logger = structlog.get_logger()

# (flag, transaction attribute)
TRANSACTION_FLAGS: tuple[tuple[str, str], ...] = (
    ("--email", "email"),
    ("--city", "city"),
    ("--state", "state"),
    ("--postal", "postal"),
    ("--country", "country"),
    ("--bin", "bin"),
    ("--amount", "amount"),
    ("--currency", "currency"),
    ("--txn-id", "txn_id"),
    ("--requested-type", "requested_type"),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score a transaction with minFraud")
    parser.add_argument("--ip", type=str, required=True, help="Customer IP address")
    for flag, attribute in TRANSACTION_FLAGS:
        parser.add_argument(flag, dest=attribute, type=str, default=None)
    parser.add_argument("--license-key", type=str, default=None, help="Overrides MINFRAUD_LICENSE_KEY")
    parser.add_argument("--uri", type=str, default=None, help="Overrides MINFRAUD_URI")
    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.license_key is not None:
        overrides["license_key"] = args.license_key
    if args.uri is not None:
        overrides["uri"] = args.uri
    if not overrides:
        return settings
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _load_settings(args)
    except pydantic.ValidationError as exc:
        parser.error(str(exc))
    setup_logging(config.log_level)

    attributes = {
        attribute: getattr(args, attribute)
        for _, attribute in TRANSACTION_FLAGS
        if getattr(args, attribute) is not None
    }

    try:
        transaction = Transaction(
            ip=args.ip,
            submitter=RequestSubmitter(config=config),
            **attributes,
        )
        summary = RiskSummary.from_response(transaction.result())
    except (MinfraudError, pydantic.ValidationError) as exc:
        logger.error("minfraud_cli_failed", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(summary.model_dump_json())
    return 0
