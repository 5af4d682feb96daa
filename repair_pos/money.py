# ==============================================================================
# MONTOS MONETARIOS
# ==============================================================================
# Todo el dinero se maneja como Decimal cuantizado a céntimos.
# Los float solo se aceptan en la frontera y se convierten vía str()
# para no arrastrar errores de representación binaria.
# ==============================================================================

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from repair_pos.config import CURRENCY_PLACES

ZERO = Decimal('0.00')


def quantize(value: Decimal, places: Decimal = CURRENCY_PLACES) -> Decimal:
    """Redondea half-up a la cuantización indicada."""
    return value.quantize(places, rounding=ROUND_HALF_UP)


def to_money(value: Any, places: Decimal = CURRENCY_PLACES) -> Decimal:
    """
    Convierte un valor a Decimal monetario.

    Args:
        value: int, str, float o Decimal
        places: Cuantización (por defecto céntimos)

    Returns:
        Decimal cuantizado

    Raises:
        ValueError: Si el valor no es numérico
    """
    if value is None or value == '':
        return quantize(ZERO, places)
    if isinstance(value, bool):
        raise ValueError(f"Monto inválido: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Monto inválido: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Monto inválido: {value!r}")
    return quantize(result, places)


def money_str(value: Decimal) -> str:
    """Representación fija con dos decimales (sin símbolo de moneda)."""
    return f"{quantize(value):.2f}"
