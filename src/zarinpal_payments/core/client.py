"""
HTTP client helpers for the ZarinPal gateway.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Type, TypeVar

import requests

from . import codec
from .config import Config, ConfigError
from .errors import DecodeError, GatewayError, TransportError
from .messages import (
    ADD_REFUND_MUTATION,
    SESSIONS_QUERY,
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
)
from .payment import CreatePaymentRequest, CreatePaymentResponse

__all__ = [
    "GRAPHQL_URL",
    "PRODUCTION_HOST",
    "SANDBOX_HOST",
    "PaymentClient",
    "create_payment",
    "gateway_host",
    "inquire_payment",
    "list_transactions",
    "list_unverified",
    "payment_url",
    "refund_payment",
    "reverse_payment",
    "verify_payment",
]

PRODUCTION_HOST = "https://payment.zarinpal.com"
SANDBOX_HOST = "https://sandbox.zarinpal.com"
GRAPHQL_URL = "https://next.zarinpal.com/api/v4/graphql"

_REST_PATH = "/pg/v4/payment"
_SUCCESS_CODES: FrozenSet[int] = frozenset({100})
# 101: the authority was already verified earlier.
_VERIFY_SUCCESS_CODES: FrozenSet[int] = frozenset({100, 101})

R = TypeVar("R", bound=codec.GatewayModel)


def gateway_host(sandbox: bool) -> str:
    return SANDBOX_HOST if sandbox else PRODUCTION_HOST


def payment_url(authority: str, *, sandbox: bool = False) -> str:
    """URL the payer is redirected to after :func:`create_payment`."""
    return f"{gateway_host(sandbox)}/pg/StartPay/{authority}"


def _headers(config: Config, *, bearer: bool = False) -> Dict[str, str]:
    headers = {
        "User-Agent": config.user_agent,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if bearer:
        if not config.access_token:
            raise ConfigError("An access token is required for GraphQL operations")
        headers["Authorization"] = f"Bearer {config.access_token}"
    return headers


def _post_json(
    session: requests.Session,
    url: str,
    body: Mapping[str, Any],
    *,
    config: Config,
    bearer: bool = False,
) -> Tuple[Any, int]:
    encoded = codec.dumps(body)
    logging.info("Submitting request to %s", url)
    logging.debug("Request body: %s", encoded)
    try:
        response = session.post(
            url,
            data=encoded.encode("utf-8"),
            headers=_headers(config, bearer=bearer),
            timeout=config.timeout_seconds,
        )
    except requests.RequestException as exc:
        raise TransportError(f"Request to {url} failed: {exc}") from exc

    logging.debug("Gateway responded with %s: %s", response.status_code, response.text)
    try:
        payload = codec.loads(response.text)
    except DecodeError:
        if response.status_code >= 400:
            raise TransportError(
                f"Gateway responded with {response.status_code}: {response.text}",
                status_code=response.status_code,
            ) from None
        raise
    return payload, response.status_code


def _raise_for_errors(errors: Any, status_code: int) -> None:
    if not errors:
        return
    code: Optional[int] = None
    message: Optional[str] = None
    if isinstance(errors, Mapping):
        code = errors.get("code")
        message = errors.get("message")
    elif isinstance(errors, list) and isinstance(errors[0], Mapping):
        message = errors[0].get("message")
        code = errors[0].get("code")
    raise GatewayError(
        message or f"Gateway reported an error: {errors}",
        code=code if isinstance(code, int) else None,
        status_code=status_code,
        errors=errors,
    )


def _unwrap(payload: Any, status_code: int) -> Any:
    if not isinstance(payload, Mapping):
        raise DecodeError(f"Expected a JSON object envelope, got {type(payload).__name__}")
    _raise_for_errors(payload.get("errors"), status_code)
    if status_code >= 400:
        raise TransportError(
            f"Gateway responded with {status_code} without an error body",
            status_code=status_code,
        )
    if "data" not in payload:
        raise DecodeError("Response envelope has no 'data' member")
    return payload["data"]


def _rest_call(
    session: requests.Session,
    config: Config,
    endpoint: str,
    body: Mapping[str, Any],
    response_type: Type[R],
    success_codes: FrozenSet[int] = _SUCCESS_CODES,
) -> R:
    url = f"{gateway_host(config.sandbox)}{_REST_PATH}/{endpoint}"
    payload, status_code = _post_json(session, url, body, config=config)
    data = _unwrap(payload, status_code)
    # Failure replies omit the success fields, so the code is checked first.
    code = data.get("code") if isinstance(data, Mapping) else None
    if isinstance(code, int) and code not in success_codes:
        raise GatewayError(
            data.get("message") or f"Gateway returned code {code}",
            code=code,
            status_code=status_code,
        )
    return response_type.from_dict(data)


def _graphql_call(
    session: requests.Session,
    config: Config,
    query: str,
    variables: Mapping[str, Any],
) -> Mapping[str, Any]:
    body = {"query": query, "variables": dict(variables)}
    payload, status_code = _post_json(session, GRAPHQL_URL, body, config=config, bearer=True)
    data = _unwrap(payload, status_code)
    if not isinstance(data, Mapping):
        raise DecodeError(f"Expected a GraphQL data object, got {type(data).__name__}")
    return data


def _with_merchant(request: R, config: Config) -> R:
    if request.merchant_id is None:
        return request.model_copy(update={"merchant_id": config.merchant_id})
    return request


def create_payment(
    session: requests.Session,
    config: Config,
    request: CreatePaymentRequest,
    *,
    validate: bool = True,
) -> CreatePaymentResponse:
    """
    Register a payment and return the gateway's authority for it.

    ``merchant_id`` and ``sandbox`` are filled from ``config`` when the
    request leaves them unset. With ``validate`` the request must pass
    :meth:`CreatePaymentRequest.is_valid_basic` before anything is sent.
    """
    request = request.copy_with_config(config)
    if validate and not request.is_valid_basic():
        raise ValueError(f"Refusing to send invalid payment request: {request.short_info()}")
    return _rest_call(session, config, "request.json", request.to_dict(), CreatePaymentResponse)


def verify_payment(
    session: requests.Session,
    config: Config,
    request: PaymentVerifyRequest,
) -> PaymentVerificationResponse:
    request = _with_merchant(request, config)
    return _rest_call(
        session,
        config,
        "verify.json",
        request.to_dict(),
        PaymentVerificationResponse,
        success_codes=_VERIFY_SUCCESS_CODES,
    )


def inquire_payment(
    session: requests.Session,
    config: Config,
    request: PaymentInquiryRequest,
) -> PaymentInquiryResponse:
    request = _with_merchant(request, config)
    return _rest_call(session, config, "inquiry.json", request.to_dict(), PaymentInquiryResponse)


def list_unverified(
    session: requests.Session,
    config: Config,
    request: Optional[PaymentUnVerifiedRequest] = None,
) -> PaymentUnVerifiedResponse:
    request = _with_merchant(request or PaymentUnVerifiedRequest(), config)
    return _rest_call(
        session, config, "unVerified.json", request.to_dict(), PaymentUnVerifiedResponse
    )


def reverse_payment(
    session: requests.Session,
    config: Config,
    request: PaymentReverseRequest,
) -> PaymentReverseResponse:
    request = _with_merchant(request, config)
    return _rest_call(session, config, "reverse.json", request.to_dict(), PaymentReverseResponse)


def list_transactions(
    session: requests.Session,
    config: Config,
    request: TransactionRequest,
) -> List[Session]:
    data = _graphql_call(session, config, SESSIONS_QUERY, request.to_dict())
    sessions = data.get("Session")
    if sessions is None:
        return []
    if not isinstance(sessions, list):
        raise DecodeError(f"Session: expected a JSON array, got {type(sessions).__name__}")
    return [Session.from_dict(item) for item in sessions]


def refund_payment(
    session: requests.Session,
    config: Config,
    request: PaymentRefundRequest,
) -> PaymentRefundResponse:
    data = _graphql_call(session, config, ADD_REFUND_MUTATION, request.to_dict())
    return PaymentRefundResponse.from_dict(data.get("resource"))


class PaymentClient:
    """
    Thin convenience wrapper binding a :class:`Config` to a ``requests`` session.

    Every call is a single independent exchange; the only state held is the
    immutable config and the session.
    """

    def __init__(
        self,
        config: Config,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self._owns_session = session is None
        self.session = session or requests.Session()

    def __enter__(self) -> "PaymentClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def payment_url(self, authority: str) -> str:
        return payment_url(authority, sandbox=self.config.sandbox)

    def create_payment(
        self,
        request: CreatePaymentRequest,
        *,
        validate: bool = True,
    ) -> CreatePaymentResponse:
        return create_payment(self.session, self.config, request, validate=validate)

    def verify_payment(self, request: PaymentVerifyRequest) -> PaymentVerificationResponse:
        return verify_payment(self.session, self.config, request)

    def inquire_payment(self, request: PaymentInquiryRequest) -> PaymentInquiryResponse:
        return inquire_payment(self.session, self.config, request)

    def list_unverified(
        self,
        request: Optional[PaymentUnVerifiedRequest] = None,
    ) -> PaymentUnVerifiedResponse:
        return list_unverified(self.session, self.config, request)

    def reverse_payment(self, request: PaymentReverseRequest) -> PaymentReverseResponse:
        return reverse_payment(self.session, self.config, request)

    def list_transactions(self, request: TransactionRequest) -> List[Session]:
        return list_transactions(self.session, self.config, request)

    def refund_payment(self, request: PaymentRefundRequest) -> PaymentRefundResponse:
        return refund_payment(self.session, self.config, request)
