from decimal import Decimal

import pytest

from repair_pos import DEFAULT_SETTINGS, AppContainer
from repair_pos.exceptions import ValidationError
from repair_pos.money import money_str, to_money
from repair_pos.services.pricing import compute_totals, validate_line_items


def test_totals_for_reference_lines():
    totals = compute_totals([(2, Decimal('10.00')), (1, Decimal('25.00'))], Decimal('0.20'))
    assert totals.subtotal == Decimal('45.00')
    assert totals.tax == Decimal('9.00')
    assert totals.total == Decimal('54.00')
    assert totals.to_dict() == {'subtotal': '45.00', 'tax': '9.00', 'total': '54.00'}


def test_totals_do_not_drift_when_recomputed():
    lines = [(2, 10.00), (1, 25.00)]
    results = {compute_totals(lines) for _ in range(1000)}
    assert len(results) == 1
    assert results.pop().total == Decimal('54.00')


def test_float_prices_are_converted_through_str():
    totals = compute_totals([(3, 0.1)], Decimal('0'))
    assert totals.subtotal == Decimal('0.30')


def test_to_money_rounds_half_up():
    assert to_money('2.345') == Decimal('2.35')
    assert to_money('2.344') == Decimal('2.34')
    assert to_money(None) == Decimal('0.00')
    assert money_str(Decimal('7')) == '7.00'


@pytest.mark.parametrize('value', ['abc', True, 'NaN', 'Infinity'])
def test_to_money_rejects_non_numeric(value):
    with pytest.raises(ValueError):
        to_money(value)


def test_validate_line_items_ok():
    items = validate_line_items([
        {'name': 'Screen', 'quantity': 2, 'unit_price': '10.00'},
        {'name': 'Battery', 'quantity': '1', 'unit_price': 25},
    ])
    assert [i.name for i in items] == ['Screen', 'Battery']
    assert items[0].line_total == Decimal('20.00')


@pytest.mark.parametrize('line, field', [
    ({'name': '', 'quantity': 1, 'unit_price': 5}, 'name'),
    ({'name': 'X', 'quantity': 0, 'unit_price': 5}, 'quantity'),
    ({'name': 'X', 'quantity': 'two', 'unit_price': 5}, 'quantity'),
    ({'name': 'X', 'quantity': 1, 'unit_price': 0}, 'unit_price'),
    ({'name': 'X', 'quantity': 1, 'unit_price': '-3'}, 'unit_price'),
])
def test_validate_line_items_rejects(line, field):
    with pytest.raises(ValidationError) as exc:
        validate_line_items([line])
    assert exc.value.details['field'] == field


def test_validate_line_items_requires_a_line():
    with pytest.raises(ValidationError):
        validate_line_items([])


def test_money_precision_is_fixed_to_cents(clock):
    with pytest.raises(TypeError):
        DEFAULT_SETTINGS.with_overrides(currency_places=Decimal('1'))

    container = AppContainer(clock=clock)
    product = container.inventory_service.add_product({'name': 'Cable', 'price': '10.555'})
    container.cart_service.add_to_cart(product.id, 1)
    assert container.cart_service.compute_totals().total == Decimal('12.67')
