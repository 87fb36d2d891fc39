"""
Public, high-level helpers for interacting with the ZarinPal gateway.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import PaymentClient
from .core.config import Config, load_config
from .core.payment import CreatePaymentRequest, CreatePaymentResponse

__all__ = [
    "create_payment_client",
    "start_payment",
]


def create_payment_client(
    *,
    config: Optional[Config] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    merchant_id: Optional[str] = None,
    sandbox: Optional[bool] = None,
    access_token: Optional[str] = None,
    timeout_seconds: Optional[int] = None,
    user_agent: Optional[str] = None,
) -> PaymentClient:
    """
    Construct a :class:`PaymentClient`.

    Callers can either supply a ready-made :class:`Config` or let the helper
    assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            merchant_id,
            sandbox,
            access_token,
            timeout_seconds,
            user_agent,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built Config or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            merchant_id=merchant_id,
            sandbox=sandbox,
            access_token=access_token,
            timeout_seconds=timeout_seconds,
            user_agent=user_agent,
        )
    return PaymentClient(cfg, session=session)


def start_payment(
    request: CreatePaymentRequest,
    *,
    config: Optional[Config] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    validate: bool = True,
) -> tuple[CreatePaymentResponse, str]:
    """
    Create a payment and return the gateway's answer with the redirect URL.

    The URL is where the payer should be sent to complete the payment.
    """
    client = create_payment_client(config=config, session=session, env_file=env_file)
    with client:
        response = client.create_payment(request, validate=validate)
    return response, client.payment_url(response.authority)
