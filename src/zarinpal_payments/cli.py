"""
Command-line interface for exercising the ZarinPal gateway APIs.
"""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Sequence

from .core.client import PaymentClient
from .core.codec import GatewayModel
from .core.config import Config, ConfigError, load_config
from .core.errors import ZarinPalError
from .core.messages import (
    PaymentInquiryRequest,
    PaymentReverseRequest,
    PaymentVerifyRequest,
)
from .core.payment import CreatePaymentBuilder, WagesPaymentRequest

_LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _wage(value: str) -> WagesPaymentRequest:
    parts = value.split(":", 2)
    if len(parts) != 3:
        raise argparse.ArgumentTypeError("Wages must look like IBAN:AMOUNT:DESCRIPTION")
    iban, amount, description = parts
    try:
        return WagesPaymentRequest(iban=iban.strip(), amount=int(amount), description=description)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Wage amount must be an integer, got '{amount}'") from exc


def _parse_overrides(parser: argparse.ArgumentParser, entries: Iterable[str]) -> Dict[str, str]:
    """Turn repeated ``--set KEY=VALUE`` entries into a mapping; later entries win."""
    overrides: Dict[str, str] = {}
    for entry in entries:
        key, separator, value = entry.partition("=")
        if not separator or not key.strip():
            parser.error(f"--set expects KEY=VALUE, got '{entry}'")
        overrides[key.strip()] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zarinpal-payments",
        description="Call the ZarinPal payment gateway from the command line",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing ZARINPAL_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=_LOG_LEVELS,
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--merchant-id", help="Merchant id (overrides ZARINPAL_MERCHANT_ID)")
    parser.add_argument(
        "--sandbox",
        action="store_true",
        default=None,
        help="Talk to the sandbox gateway instead of production",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create", help="Create a payment and print its redirect URL")
    create.add_argument("--amount", type=int, required=True)
    create.add_argument("--description", required=True)
    create.add_argument("--callback-url", required=True)
    create.add_argument("--mobile")
    create.add_argument("--email")
    create.add_argument("--currency", help="IRR or IRT")
    create.add_argument("--referrer")
    create.add_argument("--card-pan")
    create.add_argument(
        "--wage",
        action="append",
        type=_wage,
        metavar="IBAN:AMOUNT:DESCRIPTION",
        default=None,
        help="Add a wage split; repeat for several beneficiaries",
    )
    create.add_argument(
        "--strict",
        action="store_true",
        help="Require wage splits to add up to the amount",
    )
    create.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the request body instead of sending it",
    )

    verify = commands.add_parser("verify", help="Verify a paid authority")
    verify.add_argument("--authority", required=True)
    verify.add_argument("--amount", type=int, required=True)

    inquiry = commands.add_parser("inquiry", help="Show the status of an authority")
    inquiry.add_argument("--authority", required=True)

    commands.add_parser("unverified", help="List paid but unverified authorities")

    reverse = commands.add_parser("reverse", help="Reverse a verified payment")
    reverse.add_argument("--authority", required=True)

    url = commands.add_parser("url", help="Print the StartPay URL for an authority")
    url.add_argument("--authority", required=True)

    return parser


def _print_json(payload: GatewayModel) -> None:
    print(payload.to_json(pretty=True))


def _run_create(client: PaymentClient, args: argparse.Namespace) -> int:
    builder = (
        CreatePaymentBuilder()
        .description(args.description)
        .callback(args.callback_url)
        .amount(args.amount)
        .metadata(args.mobile, args.email)
        .referrer(args.referrer)
        .currency(args.currency)
        .card_pan(args.card_pan)
    )
    for wage in args.wage or ():
        builder.wage(wage.iban, wage.amount, wage.description)
    request = builder.build().copy_with_config(client.config)

    valid = request.is_valid_strict() if args.strict else request.is_valid_basic()
    if not valid:
        logging.error("Invalid payment request: %s", request.short_info())
        if args.strict and not request.sum_matches():
            logging.error(
                "Wage splits add up to %s but the amount is %s",
                request.wages_total(),
                request.amount,
            )
        return 1

    if args.dry_run:
        print(request.to_json(pretty=True))
        return 0

    response = client.create_payment(request)
    logging.info("Payment created with authority %s", response.authority)
    _print_json(response)
    print(client.payment_url(response.authority))
    return 0


def _dispatch(client: PaymentClient, args: argparse.Namespace) -> int:
    if args.command == "create":
        return _run_create(client, args)
    if args.command == "verify":
        result = client.verify_payment(
            PaymentVerifyRequest(authority=args.authority, amount=args.amount)
        )
        if result.already_verified:
            logging.info("Authority %s was already verified", args.authority)
        _print_json(result)
    elif args.command == "inquiry":
        _print_json(client.inquire_payment(PaymentInquiryRequest(authority=args.authority)))
    elif args.command == "unverified":
        _print_json(client.list_unverified())
    elif args.command == "reverse":
        _print_json(client.reverse_payment(PaymentReverseRequest(authority=args.authority)))
    elif args.command == "url":
        print(client.payment_url(args.authority))
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = _parse_overrides(parser, args.set or ())
    logging.basicConfig(level=args.log_level, format=_LOG_FORMAT)

    try:
        config: Config = load_config(
            env_file=args.env_file,
            overrides=overrides,
            merchant_id=args.merchant_id,
            sandbox=args.sandbox,
        )
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with PaymentClient(config) as client:
        try:
            return _dispatch(client, args)
        except ZarinPalError as exc:
            logging.error("%s request failed: %s", args.command, exc)
            return 1
