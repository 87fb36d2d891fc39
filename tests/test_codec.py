"""Tests for JSON encoding and decoding of gateway messages."""

import json

import pytest

from zarinpal_payments import (
    CreatePaymentBuilder,
    CreatePaymentRequest,
    DecodeError,
    Metadata,
    PaymentUnVerifiedResponse,
    PaymentVerificationResponse,
)
from zarinpal_payments.core import codec


@pytest.fixture
def full_request():
    return (
        CreatePaymentBuilder()
        .merchant("mid-123")
        .sandbox(False)
        .description("Order #42")
        .callback("https://shop.example/cb")
        .amount(1000)
        .metadata("09120000000", "buyer@example.com")
        .referrer("ref-1")
        .currency("IRR")
        .card_pan("6037990000000000")
        .wage("IR1", 400, "a")
        .wage("IR2", 600, "b")
        .build()
    )


class TestEncoding:
    def test_wire_keys(self, full_request):
        payload = json.loads(full_request.to_json())
        assert payload == {
            "merchant_id": "mid-123",
            "sandBox": False,
            "description": "Order #42",
            "callback_url": "https://shop.example/cb",
            "amount": 1000,
            "metadata": {"mobile": "09120000000", "email": "buyer@example.com"},
            "referrer_id": "ref-1",
            "currency": "IRR",
            "cardPan": "6037990000000000",
            "wages": [
                {"iban": "IR1", "amount": 400, "description": "a"},
                {"iban": "IR2", "amount": 600, "description": "b"},
            ],
        }

    def test_null_fields_omitted(self):
        request = CreatePaymentRequest(description="d", callback_url="c", amount=1)
        assert json.loads(request.to_json()) == {"description": "d", "callback_url": "c", "amount": 1}

    def test_compact_output(self, full_request):
        text = full_request.to_json()
        assert "\n" not in text
        assert ", " not in text.replace("Order #42", "")
        assert text.startswith('{"merchant_id":"mid-123","sandBox":false,"description":"Order #42"')

    def test_pretty_output_has_same_fields(self, full_request):
        pretty = full_request.to_json(pretty=True)
        assert "\n    " in pretty
        assert json.loads(pretty) == json.loads(full_request.to_json())

    def test_str_is_pretty_json(self, full_request):
        assert str(full_request) == full_request.to_json(pretty=True)

    def test_non_ascii_kept(self):
        request = CreatePaymentRequest(description="خرید", callback_url="c", amount=1)
        assert "خرید" in request.to_json()


class TestDecoding:
    def test_round_trip(self, full_request):
        assert CreatePaymentRequest.from_json(full_request.to_json()) == full_request

    def test_round_trip_pretty(self, full_request):
        assert CreatePaymentRequest.from_json(full_request.to_json(pretty=True)) == full_request

    def test_unknown_fields_ignored(self):
        text = json.dumps(
            {
                "description": "d",
                "callback_url": "c",
                "amount": 5,
                "order_id": "x-1",
                "metadata": {"email": "a@b.c", "order_id": 7},
            }
        )
        request = CreatePaymentRequest.from_json(text)
        assert request.metadata == Metadata(email="a@b.c")
        assert request.merchant_id is None

    def test_empty_wages_decode_as_absent(self):
        text = json.dumps({"description": "d", "callback_url": "c", "amount": 5, "wages": []})
        assert CreatePaymentRequest.from_json(text).wages is None

    def test_malformed_json(self):
        with pytest.raises(DecodeError):
            CreatePaymentRequest.from_json("{not json")

    def test_not_an_object(self):
        with pytest.raises(DecodeError):
            CreatePaymentRequest.from_json("[1, 2]")

    def test_missing_required_field(self):
        with pytest.raises(DecodeError, match="callback_url"):
            CreatePaymentRequest.from_json('{"description": "d", "amount": 1}')

    @pytest.mark.parametrize(
        "field,value",
        [
            ("amount", "1000"),
            ("amount", True),
            ("sandBox", "yes"),
            ("description", 5),
            ("wages", {"iban": "IR1"}),
            ("metadata", "0912"),
        ],
    )
    def test_wrong_types(self, field, value):
        payload = {"description": "d", "callback_url": "c", "amount": 1}
        payload[field] = value
        with pytest.raises(DecodeError):
            CreatePaymentRequest.from_dict(payload)

    def test_nested_wage_error_names_position(self):
        payload = {
            "description": "d",
            "callback_url": "c",
            "amount": 1,
            "wages": [{"iban": "IR1", "amount": 1, "description": "a"}, {"iban": "IR2"}],
        }
        with pytest.raises(DecodeError, match=r"wages\[1\]"):
            CreatePaymentRequest.from_dict(payload)

    def test_response_list_decoding(self):
        response = PaymentUnVerifiedResponse.from_dict(
            {
                "code": 100,
                "message": "Success",
                "authorities": [
                    {
                        "authority": "A0000000000000000000000000000000001",
                        "amount": 50500,
                        "callback_url": "https://shop.example/cb",
                        "referer": "https://shop.example/",
                        "date": "2024-01-01 10:00:00",
                    }
                ],
            }
        )
        assert response.authorities[0].amount == 50500
        assert isinstance(response.authorities, tuple)

    def test_round_trip_keeps_referrer_and_contact(self, full_request):
        decoded = CreatePaymentRequest.from_json(full_request.to_json())
        assert decoded.referrer_id == "ref-1"
        assert decoded.metadata == Metadata(mobile="09120000000", email="buyer@example.com")

    def test_deeply_nested_json(self):
        text = "[" * 200000
        with pytest.raises(DecodeError):
            CreatePaymentRequest.from_json(text)
        with pytest.raises(DecodeError):
            codec.loads(text)

    @pytest.mark.parametrize("fee", [1200, "1200"])
    def test_shaparak_fee_number_or_string(self, fee):
        response = PaymentVerificationResponse.from_dict({"code": 100, "shaparak_fee": fee})
        assert response.shaparak_fee == fee

    @pytest.mark.parametrize("fee", [{"x": [1]}, [1200], 12.5, True])
    def test_shaparak_fee_rejects_other_shapes(self, fee):
        with pytest.raises(DecodeError, match="shaparak_fee"):
            PaymentVerificationResponse.from_dict({"code": 100, "shaparak_fee": fee})
