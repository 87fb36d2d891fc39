"""
Request and response shapes for the operations that follow payment creation.

Verify, inquiry, un-verified listing and reverse go to the v4 REST
endpoints. Refunds and transaction listing go through the GraphQL API; the
query documents live here next to the shapes they fill.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

from pydantic import StrictInt, StrictStr

from .codec import GatewayModel

__all__ = [
    "ADD_REFUND_MUTATION",
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
    "SESSIONS_QUERY",
    "Session",
    "TransactionRequest",
    "UnverifiedAuthority",
]


# -- verify -------------------------------------------------------------


class PaymentVerifyRequest(GatewayModel):
    authority: StrictStr
    amount: StrictInt
    merchant_id: Optional[StrictStr] = None


class PaymentVerificationResponse(GatewayModel):
    code: StrictInt
    message: StrictStr = ""
    ref_id: Optional[StrictInt] = None
    card_pan: Optional[StrictStr] = None
    card_hash: Optional[StrictStr] = None
    fee_type: Optional[StrictStr] = None
    fee: Optional[StrictInt] = None
    # Reported as a number or a numeric string depending on the terminal.
    shaparak_fee: Optional[Union[StrictInt, StrictStr]] = None

    @property
    def already_verified(self) -> bool:
        return self.code == 101


# -- inquiry ------------------------------------------------------------


class PaymentInquiryRequest(GatewayModel):
    authority: StrictStr
    merchant_id: Optional[StrictStr] = None


class PaymentInquiryResponse(GatewayModel):
    code: StrictInt
    message: StrictStr = ""
    status: Optional[StrictStr] = None


# -- un-verified --------------------------------------------------------


class PaymentUnVerifiedRequest(GatewayModel):
    merchant_id: Optional[StrictStr] = None


class UnverifiedAuthority(GatewayModel):
    authority: StrictStr
    amount: StrictInt
    callback_url: Optional[StrictStr] = None
    referer: Optional[StrictStr] = None
    date: Optional[StrictStr] = None


class PaymentUnVerifiedResponse(GatewayModel):
    code: StrictInt
    message: StrictStr = ""
    authorities: Tuple[UnverifiedAuthority, ...] = ()


# -- reverse ------------------------------------------------------------


class PaymentReverseRequest(GatewayModel):
    authority: StrictStr
    merchant_id: Optional[StrictStr] = None


class PaymentReverseResponse(GatewayModel):
    code: StrictInt
    message: StrictStr = ""


# -- transactions (GraphQL) ---------------------------------------------

SESSIONS_QUERY = """
query Sessions($terminal_id: ID!, $filter: FilterEnum, $id: ID, $reference_id: String,
               $rrn: String, $card_pan: String, $email: String, $mobile: String,
               $description: String, $limit: Int, $offset: Int) {
  Session(terminal_id: $terminal_id, filter: $filter, id: $id, reference_id: $reference_id,
          rrn: $rrn, card_pan: $card_pan, email: $email, mobile: $mobile,
          description: $description, limit: $limit, offset: $offset) {
    id
    status
    amount
    description
    created_at
  }
}
""".strip()


class TransactionRequest(GatewayModel):
    """Filters for the ``Session`` query; ``filter`` is e.g. ``PAID`` or ``VERIFIED``."""

    terminal_id: StrictStr
    filter: Optional[StrictStr] = None
    id: Optional[StrictStr] = None
    reference_id: Optional[StrictStr] = None
    rrn: Optional[StrictStr] = None
    card_pan: Optional[StrictStr] = None
    email: Optional[StrictStr] = None
    mobile: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    limit: Optional[StrictInt] = None
    offset: Optional[StrictInt] = None


class Session(GatewayModel):
    id: StrictStr
    status: Optional[StrictStr] = None
    amount: Optional[StrictInt] = None
    description: Optional[StrictStr] = None
    created_at: Optional[StrictStr] = None


# -- refund (GraphQL) ---------------------------------------------------

ADD_REFUND_MUTATION = """
mutation AddRefund($session_id: ID!, $amount: BigInteger!, $description: String,
                   $method: InstantPayoutActionTypeEnum, $reason: RefundReasonEnum) {
  resource: AddRefund(session_id: $session_id, amount: $amount, description: $description,
                      method: $method, reason: $reason) {
    terminal_id
    id
    amount
    timeline {
      refund_amount
      refund_time
      refund_status
    }
  }
}
""".strip()


class PaymentRefundRequest(GatewayModel):
    session_id: StrictStr
    amount: StrictInt
    description: Optional[StrictStr] = None
    method: StrictStr = "CARD"
    reason: StrictStr = "CUSTOMER_REQUEST"


class RefundTimeline(GatewayModel):
    refund_amount: Optional[StrictInt] = None
    refund_time: Optional[StrictStr] = None
    refund_status: Optional[StrictStr] = None


class PaymentRefundResponse(GatewayModel):
    id: StrictStr
    terminal_id: Optional[StrictStr] = None
    amount: Optional[StrictInt] = None
    timeline: Optional[RefundTimeline] = None
