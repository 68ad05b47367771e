from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator


def coerce_number(value: Any) -> float | None:
    """Coerce a JSON number or decimal string to float.

    ``None``, blanks, booleans, unparsable text and non-finite values all
    map to ``None`` so callers never see NaN.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError, InvalidOperation):
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


Money = Annotated[float | None, BeforeValidator(coerce_number)]
