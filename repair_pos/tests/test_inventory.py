from decimal import Decimal

import pytest

from repair_pos.exceptions import NotFoundError, ValidationError
from repair_pos.models import AuditType


def test_add_product_generates_sku(container):
    product = container.inventory_service.add_product({'name': 'Funda', 'price': 12.5})
    assert product.sku == f"SKU-{product.id[:5].upper()}"
    assert product.price == Decimal('12.50')
    assert product.stock == 0


def test_add_product_keeps_given_sku(container, product):
    explicit = container.inventory_service.add_product({'name': 'Cargador', 'sku': 'CHG-01'})
    assert explicit.sku == 'CHG-01'
    assert container.inventory_service.search_by_sku('CHG-01').id == explicit.id


@pytest.mark.parametrize('data', [
    {'price': 10},
    {'name': '', 'price': 10},
    {'name': 'X', 'price': -1},
    {'name': 'X', 'stock': 'many'},
])
def test_invalid_products(container, data):
    with pytest.raises(ValidationError):
        container.inventory_service.add_product(data)


def test_adjust_stock_is_not_clamped(container, product):
    service = container.inventory_service
    assert product.stock == 5
    assert service.adjust_stock(product.id, -3) == 2
    assert service.adjust_stock(product.id, -10) == -8
    assert service.get_product(product.id).stock == -8


def test_negative_stock_is_flagged_in_audit(container, product):
    container.inventory_service.adjust_stock(product.id, -6)
    entry = container.audit_service.get_logs(AuditType.STOCK, related_id=product.id)[0]
    assert 'STOCK NEGATIVO' in entry.message
    assert entry.details == {'delta': -6, 'from': 5, 'to': -1}


def test_adjust_stock_validation(container, product):
    service = container.inventory_service
    with pytest.raises(ValidationError):
        service.adjust_stock(product.id, 1.5)
    with pytest.raises(ValidationError):
        service.adjust_stock(product.id, True)
    with pytest.raises(NotFoundError):
        service.adjust_stock('missing', 1)


def test_update_product(container, product):
    updated = container.inventory_service.update_product(product.id, {'price': '12.99', 'category': 'Cables'})
    assert updated.price == Decimal('12.99')
    assert updated.name == 'Cable USB-C'
    assert 'Cables' in container.inventory_service.categories()
    with pytest.raises(NotFoundError):
        container.inventory_service.update_product('missing', {'price': 1})


def test_low_stock_products(demo):
    low = demo.inventory_service.low_stock_products()
    assert low == []
    demo.inventory_service.adjust_stock('2', -1)
    assert [p.name for p in demo.inventory_service.low_stock_products()] == ['Samsung Galaxy Tab S8']


def test_search_products(demo):
    service = demo.inventory_service
    assert [p.id for p in service.search_products('dell')] == ['3']
    assert [p.id for p in service.search_products('', 'Tablets')] == ['2']
    assert [p.id for p in service.search_products('powerful', 'all')] == ['1', '2', '3']
    assert service.search_products('iphone', 'Laptops') == []


def test_categories(container):
    service = container.inventory_service
    assert service.categories() == ['Phones', 'Tablets', 'Laptops', 'Accessories']
    service.add_category('Repairs')
    service.add_category('Phones')
    assert service.categories()[-1] == 'Repairs'
    assert service.categories().count('Phones') == 1
    with pytest.raises(ValidationError):
        service.add_category(' ')
