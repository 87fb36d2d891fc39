"""
Data shapes for the "create payment" call.

:class:`CreatePaymentRequest` is immutable: helpers such as
:meth:`CreatePaymentRequest.add_wage` return a new request and leave the
receiver untouched. :class:`CreatePaymentBuilder` is the mutable way of
assembling one.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from pydantic import Field, StrictBool, StrictInt, StrictStr, field_validator

from .codec import GatewayModel
from .config import Config

__all__ = [
    "CreatePaymentBuilder",
    "CreatePaymentRequest",
    "CreatePaymentResponse",
    "Metadata",
    "WageSplit",
    "WagesPaymentRequest",
    "build_metadata",
]


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class Metadata(GatewayModel):
    """Optional payer contact details forwarded to the gateway."""

    mobile: Optional[StrictStr] = None
    email: Optional[StrictStr] = None

    def has_any_contact(self) -> bool:
        return not _is_blank(self.mobile) or not _is_blank(self.email)

    def merge(self, other: "Metadata") -> "Metadata":
        """Combine field-wise, preferring ``other`` wherever it has a value."""
        return Metadata(
            mobile=other.mobile if other.mobile is not None else self.mobile,
            email=other.email if other.email is not None else self.email,
        )

    def to_single_line(self) -> str:
        return " | ".join(value for value in (self.mobile, self.email) if value is not None)


def build_metadata(mobile: Optional[str] = None, email: Optional[str] = None) -> Optional[Metadata]:
    """
    Return :class:`Metadata` for the given contact details, or ``None``.

    An empty ``Metadata`` is never produced: if both values are blank the
    request simply carries no metadata.
    """
    if _is_blank(mobile) and _is_blank(email):
        return None
    return Metadata(mobile=mobile, email=email)


class WagesPaymentRequest(GatewayModel):
    """One beneficiary share of a payment, paid to ``iban``."""

    iban: StrictStr
    amount: StrictInt
    description: StrictStr

    def is_valid(self) -> bool:
        return not _is_blank(self.iban) and self.amount > 0 and not _is_blank(self.description)

    def with_amount(self, amount: int) -> "WagesPaymentRequest":
        return self.model_copy(update={"amount": amount})

    def short_label(self) -> str:
        return f"{self.amount} to {self.iban}"


WageSplit = WagesPaymentRequest


class CreatePaymentRequest(GatewayModel):
    merchant_id: Optional[StrictStr] = None
    # The gateway expects this exact mixed-case key.
    sandbox: Optional[StrictBool] = Field(default=None, alias="sandBox")
    description: StrictStr
    callback_url: StrictStr
    amount: StrictInt
    metadata: Optional[Metadata] = None
    referrer_id: Optional[StrictStr] = None
    currency: Optional[StrictStr] = None
    card_pan: Optional[StrictStr] = Field(default=None, alias="cardPan")
    wages: Optional[Tuple[WagesPaymentRequest, ...]] = None

    @field_validator("wages")
    @classmethod
    def _empty_wages_are_absent(cls, wages: Optional[Tuple[WagesPaymentRequest, ...]]):
        return wages or None

    def __str__(self) -> str:
        return self.to_json(pretty=True)

    def _replace(self, **changes: Any) -> "CreatePaymentRequest":
        # Rebuilt through validation so the wages rule holds on every copy.
        return type(self)(**{**dict(self), **changes})

    # -- construction -------------------------------------------------

    @classmethod
    def with_contact(
        cls,
        *,
        merchant_id: str,
        description: str,
        callback_url: str,
        amount: int,
        sandbox: Optional[bool] = None,
        mobile: Optional[str] = None,
        email: Optional[str] = None,
        referrer_id: Optional[str] = None,
        currency: Optional[str] = None,
        card_pan: Optional[str] = None,
        wages: Optional[Sequence[WagesPaymentRequest]] = None,
    ) -> "CreatePaymentRequest":
        """Build a request from raw ``mobile``/``email`` instead of :class:`Metadata`."""
        return cls(
            merchant_id=merchant_id,
            sandbox=sandbox,
            description=description,
            callback_url=callback_url,
            amount=amount,
            metadata=build_metadata(mobile, email),
            referrer_id=referrer_id,
            currency=currency,
            card_pan=card_pan,
            wages=tuple(wages) if wages is not None else None,
        )

    def copy_with_config(self, config: Config) -> "CreatePaymentRequest":
        """Fill ``merchant_id`` and ``sandbox`` from ``config`` where they are unset."""
        return self._replace(
            merchant_id=self.merchant_id if self.merchant_id is not None else config.merchant_id,
            sandbox=self.sandbox if self.sandbox is not None else config.sandbox,
        )

    def with_metadata(self, metadata: Metadata) -> "CreatePaymentRequest":
        """Merge ``metadata`` over the current one (or attach it if there is none)."""
        merged = self.metadata.merge(metadata) if self.metadata is not None else metadata
        return self._replace(metadata=merged if merged.has_any_contact() else None)

    # -- wages --------------------------------------------------------

    def add_wage(self, iban: str, amount: int, description: str) -> "CreatePaymentRequest":
        wage = WagesPaymentRequest(iban=iban, amount=amount, description=description)
        return self._replace(wages=(self.wages or ()) + (wage,))

    def remove_wage_by_iban(self, iban: str) -> "CreatePaymentRequest":
        if self.wages is None:
            return self._replace(wages=None)
        return self._replace(wages=tuple(wage for wage in self.wages if wage.iban != iban))

    def wages_total(self) -> int:
        return sum(wage.amount for wage in self.wages or ())

    def sum_matches(self) -> bool:
        return self.wages_total() == self.amount

    # -- validation ---------------------------------------------------

    def is_valid_basic(self) -> bool:
        return (
            not _is_blank(self.merchant_id)
            and not _is_blank(self.description)
            and not _is_blank(self.callback_url)
            and self.amount > 0
        )

    def is_valid_strict(self) -> bool:
        """Basic validity plus wage splits adding up to ``amount``.

        A positive amount with no wages is never strictly valid.
        """
        return self.is_valid_basic() and self.sum_matches()

    def is_sandbox_mode(self) -> bool:
        return self.sandbox is True

    def short_info(self) -> str:
        return f"Payment(amount={self.amount}, desc={self.description}, merchant={self.merchant_id})"


class CreatePaymentBuilder:
    """
    Fluent, single-use assembler for :class:`CreatePaymentRequest`.

    Nothing is validated; call :meth:`CreatePaymentRequest.is_valid_basic`
    or :meth:`CreatePaymentRequest.is_valid_strict` on the result.
    """

    def __init__(self) -> None:
        self._merchant_id: Optional[str] = None
        self._sandbox: Optional[bool] = None
        self._description = ""
        self._callback_url = ""
        self._amount = 0
        self._metadata: Optional[Metadata] = None
        self._referrer_id: Optional[str] = None
        self._currency: Optional[str] = None
        self._card_pan: Optional[str] = None
        self._wages: List[WagesPaymentRequest] = []

    def merchant(self, merchant_id: str) -> "CreatePaymentBuilder":
        self._merchant_id = merchant_id
        return self

    def sandbox(self, enabled: bool) -> "CreatePaymentBuilder":
        self._sandbox = enabled
        return self

    def description(self, text: str) -> "CreatePaymentBuilder":
        self._description = text
        return self

    def callback(self, url: str) -> "CreatePaymentBuilder":
        self._callback_url = url
        return self

    def amount(self, value: int) -> "CreatePaymentBuilder":
        self._amount = value
        return self

    def metadata(self, mobile: Optional[str] = None, email: Optional[str] = None) -> "CreatePaymentBuilder":
        self._metadata = build_metadata(mobile, email)
        return self

    def referrer(self, referrer_id: Optional[str]) -> "CreatePaymentBuilder":
        self._referrer_id = referrer_id
        return self

    def currency(self, code: Optional[str]) -> "CreatePaymentBuilder":
        self._currency = code
        return self

    def card_pan(self, pan: Optional[str]) -> "CreatePaymentBuilder":
        self._card_pan = pan
        return self

    def wage(self, iban: str, amount: int, description: str) -> "CreatePaymentBuilder":
        self._wages.append(WagesPaymentRequest(iban=iban, amount=amount, description=description))
        return self

    def build(self) -> CreatePaymentRequest:
        return CreatePaymentRequest(
            merchant_id=self._merchant_id,
            sandbox=self._sandbox,
            description=self._description,
            callback_url=self._callback_url,
            amount=self._amount,
            metadata=self._metadata,
            referrer_id=self._referrer_id,
            currency=self._currency,
            card_pan=self._card_pan,
            wages=tuple(self._wages) or None,
        )


class CreatePaymentResponse(GatewayModel):
    """``data`` block returned by ``request.json``."""

    code: StrictInt
    authority: StrictStr
    message: StrictStr = ""
    fee_type: Optional[StrictStr] = None
    fee: Optional[StrictInt] = None
