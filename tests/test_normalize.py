from __future__ import annotations

from decimal import Decimal

import pytest

from printduka_sdk.models_operations import LPO, Payment
from printduka_sdk.normalize import coerce_number


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (12, 12.0),
        (12.5, 12.5),
        ("1500.00", 1500.0),
        (" 42.10 ", 42.1),
        (Decimal("3.25"), 3.25),
        (None, None),
        ("", None),
        ("   ", None),
        ("n/a", None),
        (True, None),
        (float("nan"), None),
        ("inf", None),
        ({"amount": 1}, None),
    ],
)
def test_coerce_number(raw: object, expected: float | None) -> None:
    assert coerce_number(raw) == expected


def test_money_fields_accept_decimal_strings() -> None:
    lpo = LPO.model_validate(
        {"id": 1, "lpo_number": "LPO-1", "subtotal": "100.00", "vat_amount": "16.00", "total_amount": "116.00"}
    )
    assert lpo.subtotal == 100.0
    assert lpo.total_amount == 116.0


def test_money_fields_never_hold_nan() -> None:
    payment = Payment.model_validate({"id": 2, "amount": "NaN", "extra_field": "kept"})
    assert payment.amount is None
    assert payment.model_extra == {"extra_field": "kept"}
