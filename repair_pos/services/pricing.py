# ==============================================================================
# CÁLCULO DE TOTALES
# ==============================================================================
# subtotal = Σ cantidad × precio unitario
# impuesto = subtotal × tasa (20% por defecto)
# total    = subtotal + impuesto
#
# Todo en Decimal cuantizado a céntimos: recalcular N veces da siempre
# exactamente el mismo resultado.
# ==============================================================================

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from repair_pos.config import TAX_RATE
from repair_pos.exceptions import ValidationError
from repair_pos.money import ZERO, money_str, quantize, to_money


@dataclass(frozen=True)
class Totals:
    """Totales de un pedido o factura."""
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            'subtotal': money_str(self.subtotal),
            'tax': money_str(self.tax),
            'total': money_str(self.total),
        }


@dataclass(frozen=True)
class LineItem:
    """Línea de un formulario de pedido."""
    name: str
    quantity: int
    unit_price: Decimal
    description: str = ''

    @property
    def line_total(self) -> Decimal:
        return quantize(self.unit_price * self.quantity)


def compute_totals(
    lines: Iterable[Tuple[int, Decimal]],
    tax_rate: Decimal = TAX_RATE
) -> Totals:
    """
    Calcula subtotal, impuesto y total.

    Args:
        lines: Pares (cantidad, precio unitario)
        tax_rate: Tasa de impuesto

    Returns:
        Totals cuantizados a céntimos
    """
    subtotal = ZERO
    for quantity, unit_price in lines:
        subtotal += to_money(unit_price) * quantity
    subtotal = quantize(subtotal)
    tax = quantize(subtotal * tax_rate)
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def validate_line_items(lines: Iterable[Mapping[str, Any]]) -> List[LineItem]:
    """
    Valida las líneas de un formulario de pedido.

    Cada línea necesita nombre, cantidad > 0 y precio unitario > 0.

    Args:
        lines: Diccionarios con name, quantity, unit_price (description opcional)

    Returns:
        Lista de LineItem

    Raises:
        ValidationError: En la primera línea inválida
    """
    items = []
    for index, raw in enumerate(lines):
        name = str(raw.get('name') or '').strip()
        if not name:
            raise ValidationError(
                'Todas las líneas necesitan un nombre',
                {'line': index, 'field': 'name'}
            )
        try:
            quantity = int(raw.get('quantity', 0))
        except (TypeError, ValueError):
            quantity = 0
        if quantity <= 0:
            raise ValidationError(
                'La cantidad debe ser mayor a 0',
                {'line': index, 'field': 'quantity'}
            )
        try:
            unit_price = to_money(raw.get('unit_price'))
        except ValueError:
            unit_price = ZERO
        if unit_price <= 0:
            raise ValidationError(
                'El precio unitario debe ser mayor a 0',
                {'line': index, 'field': 'unit_price'}
            )
        items.append(LineItem(
            name=name,
            quantity=quantity,
            unit_price=unit_price,
            description=str(raw.get('description') or ''),
        ))
    if not items:
        raise ValidationError('Se necesita al menos una línea')
    return items
