from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..core.constants import MAX_OFFERING, MAX_REF_LENGTH, OFFERING_DECIMAL_PLACES
from ..core.exceptions import ValidationError

_TRUE_FLAGS = ("true", "1")
_FALSE_FLAGS = ("false", "0")


def require_max_length(value: str, field_name: str, max_length: Optional[int]) -> str:
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field_name} excede {max_length} caracteres")
    return value


def require_non_empty(value: str, field_name: str, max_length: Optional[int] = None) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} inválido")
    return require_max_length(value.strip(), field_name, max_length)


def require_reference(value: Any, field_name: str) -> str:
    """Ids travel as strings or ints; both are normalized to a stripped string."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} é obrigatório")
    return require_non_empty(str(value), field_name, MAX_REF_LENGTH)


def require_mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValidationError(f"{field_name} deve ser um objeto JSON")
    return value


def coerce_flag(value: Any, field_name: str) -> bool:
    """JSON booleans, 0/1 and the strings "true"/"false"/"1"/"0"; anything else is rejected."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_FLAGS:
            return True
        if text in _FALSE_FLAGS:
            return False
    raise ValidationError(f"{field_name} deve ser true ou false")


def coerce_offering(value: Any) -> Decimal:
    """Parse an offering amount.

    Policy: absent, non-numeric, NaN or infinite values count as 0 so a typo in the
    offering field never blocks saving the attendance. A comma is accepted as the
    decimal separator. Negative amounts and amounts above
    MAX_OFFERING are rejected.
    """

    if value is None or isinstance(value, bool):
        return Decimal("0.00")

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return Decimal("0.00")
        amount = Decimal(str(value))
    else:
        try:
            amount = Decimal(str(value).strip().replace(",", "."))
        except InvalidOperation:
            return Decimal("0.00")
        if not amount.is_finite():
            return Decimal("0.00")

    if amount < 0:
        raise ValidationError("Oferta não pode ser negativa")
    if amount > Decimal(MAX_OFFERING):
        raise ValidationError("Oferta fora do intervalo suportado")
    try:
        return amount.quantize(Decimal(1).scaleb(-OFFERING_DECIMAL_PLACES), rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValidationError("Oferta fora do intervalo suportado") from e


def coerce_count(value: Any) -> int:
    """Non-negative integer counter; anything unparseable counts as 0."""
    if isinstance(value, bool):
        return 0
    try:
        n = int(value)
    except (TypeError, ValueError):
        return 0
    return max(n, 0)
