"""
Minimal script that uses the public API to start a ZarinPal payment.
"""

from __future__ import annotations

import argparse
import logging
import sys

from zarinpal_payments import (
    ConfigError,
    CreatePaymentBuilder,
    ZarinPalError,
    create_payment_client,
    load_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a ZarinPal payment using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing ZARINPAL_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--amount", type=int, default=10000, help="Amount in Rials")
    parser.add_argument("--description", default="Example order")
    parser.add_argument("--callback-url", default="https://example.com/zarinpal/callback")
    parser.add_argument("--mobile", help="Payer mobile number shown on the payment page")
    parser.add_argument("--email", help="Payer email shown on the payment page")
    parser.add_argument(
        "--split-to",
        metavar="IBAN",
        help="Send the whole amount to this IBAN as a single wage split",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_config(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    builder = (
        CreatePaymentBuilder()
        .description(args.description)
        .callback(args.callback_url)
        .amount(args.amount)
        .metadata(args.mobile, args.email)
    )
    if args.split_to:
        builder.wage(args.split_to, args.amount, args.description)
    request = builder.build().copy_with_config(config)

    if args.split_to and not request.is_valid_strict():
        logging.error("Wage splits do not add up: %s", request.short_info())
        return 1

    logging.info("Sending request:\n%s", request)

    with create_payment_client(config=config) as client:
        try:
            response = client.create_payment(request)
        except ZarinPalError as exc:
            logging.error("Payment request failed: %s", exc)
            return 1

        logging.info("Redirect the payer to %s", client.payment_url(response.authority))
    return 0


if __name__ == "__main__":
    sys.exit(main())
