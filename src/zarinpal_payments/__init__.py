"""
Public facade for the ZarinPal payment gateway client.

The most useful pieces are re-exported here so integrators can
``from zarinpal_payments import ...`` without navigating the package.
"""

from .api import create_payment_client, start_payment
from .core import (
    Config,
    ConfigError,
    CreatePaymentBuilder,
    CreatePaymentRequest,
    CreatePaymentResponse,
    DecodeError,
    GatewayError,
    Metadata,
    PaymentClient,
    PaymentInquiryRequest,
    PaymentInquiryResponse,
    PaymentRefundRequest,
    PaymentRefundResponse,
    PaymentReverseRequest,
    PaymentReverseResponse,
    PaymentUnVerifiedRequest,
    PaymentUnVerifiedResponse,
    PaymentVerificationResponse,
    PaymentVerifyRequest,
    Session,
    TransactionRequest,
    TransportError,
    WageSplit,
    WagesPaymentRequest,
    ZarinPalError,
    build_metadata,
    load_config,
    payment_url,
)

__all__ = (
    "Config",
    "ConfigError",
    "CreatePaymentBuilder",
    "CreatePaymentRequest",
    "CreatePaymentResponse",
    "DecodeError",
    "GatewayError",
    "Metadata",
    "PaymentClient",
    "PaymentInquiryRequest",
    "PaymentInquiryResponse",
    "PaymentRefundRequest",
    "PaymentRefundResponse",
    "PaymentReverseRequest",
    "PaymentReverseResponse",
    "PaymentUnVerifiedRequest",
    "PaymentUnVerifiedResponse",
    "PaymentVerificationResponse",
    "PaymentVerifyRequest",
    "Session",
    "TransactionRequest",
    "TransportError",
    "WageSplit",
    "WagesPaymentRequest",
    "ZarinPalError",
    "build_metadata",
    "create_payment_client",
    "load_config",
    "payment_url",
    "start_payment",
)
