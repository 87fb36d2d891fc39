"""
Core primitives for talking to the ZarinPal payment gateway.
"""

from .client import (
    PaymentClient,
    create_payment,
    inquire_payment,
    list_transactions,
    list_unverified,
    payment_url,
    refund_payment,
    reverse_payment,
    verify_payment,
)
from .config import Config, ConfigError, load_config
from .environment import build_environment
from .errors import DecodeError, GatewayError, TransportError, ZarinPalError
from .messages import (
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
    RefundTimeline,
    Session,
    TransactionRequest,
    UnverifiedAuthority,
)
from .payment import (
    CreatePaymentBuilder,
    CreatePaymentRequest,
    CreatePaymentResponse,
    Metadata,
    WageSplit,
    WagesPaymentRequest,
    build_metadata,
)

__all__ = [
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
    "RefundTimeline",
    "Session",
    "TransactionRequest",
    "TransportError",
    "UnverifiedAuthority",
    "WageSplit",
    "WagesPaymentRequest",
    "ZarinPalError",
    "build_environment",
    "build_metadata",
    "create_payment",
    "inquire_payment",
    "list_transactions",
    "list_unverified",
    "load_config",
    "payment_url",
    "refund_payment",
    "reverse_payment",
    "verify_payment",
]
