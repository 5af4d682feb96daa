from decimal import Decimal

import pytest

from repair_pos import DEFAULT_SETTINGS, AppContainer
from repair_pos.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from repair_pos.models import AuditType, CartItem, OrderStatus


# ==============================================================================
# CARRITO
# ==============================================================================

def test_add_to_cart_replaces_quantity(container, product):
    cart = container.cart_service
    cart.add_to_cart(product.id, 2)
    items = cart.add_to_cart(product.id, 3)
    assert items == [CartItem(product_id=product.id, quantity=3)]


def test_cart_totals(container, product):
    other = container.inventory_service.add_product({'name': 'Screen protector', 'price': '25.00'})
    cart = container.cart_service
    cart.add_to_cart(product.id, 2)
    cart.add_to_cart(other.id, 1)

    view = cart.get_cart()
    assert view['subtotal'] == '45.00'
    assert view['tax'] == '9.00'
    assert view['total'] == '54.00'
    assert view['total_items'] == 3
    assert view['items'][0]['line_total'] == '20.00'


@pytest.mark.parametrize('quantity', [0, -1, 1.5, True])
def test_cart_quantity_must_be_positive_int(container, product, quantity):
    with pytest.raises(ValidationError):
        container.cart_service.add_to_cart(product.id, quantity)
    assert container.cart_service.is_empty()


def test_cart_rejects_unknown_product(container):
    with pytest.raises(InvalidReferenceError):
        container.cart_service.add_to_cart('ghost', 1)


def test_remove_from_cart(container, product):
    cart = container.cart_service
    cart.add_to_cart(product.id, 1)
    assert cart.remove_from_cart(product.id) == []
    assert cart.remove_from_cart(product.id) == []


def test_stock_warnings(container, product):
    container.cart_service.add_to_cart(product.id, 7)
    warnings = container.cart_service.stock_warnings()
    assert len(warnings) == 1
    assert 'Disponible: 5' in warnings[0]


# ==============================================================================
# PEDIDOS
# ==============================================================================

def test_create_order_clears_cart(container, product, client_id, clock):
    cart = container.cart_service
    cart.add_to_cart(product.id, 2)
    snapshot = cart.get_items()

    order = container.order_service.create_order(client_id, '20.00')

    assert cart.get_items() == []
    assert order.items == snapshot
    assert order.total == Decimal('20.00')
    assert order.status == OrderStatus.PENDING
    assert order.created_at == clock.now
    assert container.order_service.get_order(order.id) == order


def test_create_order_does_not_touch_stock(container, product, client_id):
    container.cart_service.add_to_cart(product.id, 2)
    container.order_service.create_order(client_id, 24)
    assert container.inventory_service.get_product(product.id).stock == 5


def test_create_order_with_empty_cart(container, client_id):
    with pytest.raises(ValidationError):
        container.order_service.create_order(client_id, 0)
    assert container.order_service.list_orders() == []


def test_create_order_for_unknown_client_keeps_cart(container, product):
    container.cart_service.add_to_cart(product.id, 1)
    with pytest.raises(InvalidReferenceError):
        container.order_service.create_order('ghost', 12)
    assert len(container.cart_service.get_items()) == 1


@pytest.mark.parametrize('total', ['-1', 'abc'])
def test_create_order_invalid_total(container, product, client_id, total):
    container.cart_service.add_to_cart(product.id, 1)
    with pytest.raises(ValidationError):
        container.order_service.create_order(client_id, total)


def test_strict_totals(clock, rng):
    container = AppContainer(
        settings=DEFAULT_SETTINGS.with_overrides(strict_order_totals=True),
        clock=clock,
        rng=rng,
    )
    client = container.client_service.add_client({'name': 'Ana', 'phone': '1'})
    product = container.inventory_service.add_product({'name': 'Cable', 'price': '10.00'})
    container.cart_service.add_to_cart(product.id, 2)

    with pytest.raises(ValidationError) as exc:
        container.order_service.create_order(client.id, '20.00')
    assert exc.value.details == {'expected': '24.00', 'received': '20.00'}
    assert not container.cart_service.is_empty()

    order = container.order_service.create_order(client.id, '24.00')
    assert order.total == Decimal('24.00')
    assert container.cart_service.is_empty()


def test_order_creation_is_audited(container, product, client_id):
    container.cart_service.add_to_cart(product.id, 2)
    order = container.order_service.create_order(client_id, '24.00')
    entry = container.audit_service.get_logs(AuditType.PEDIDO, related_id=order.id)[0]
    assert entry.details == {'client_id': client_id, 'total': '24.00', 'items_count': 2}


def test_update_order_status(demo):
    service = demo.order_service
    order = service.update_order_status('2', 'ready_for_pickup')
    assert order.status == OrderStatus.READY_FOR_PICKUP
    assert service.update_order_status('2', OrderStatus.PENDING).status == OrderStatus.PENDING

    with pytest.raises(ValidationError):
        service.update_order_status('2', 'shipped')
    with pytest.raises(NotFoundError):
        service.update_order_status('missing', 'completed')


def test_remove_order(demo):
    removed = demo.order_service.remove_order('6')
    assert removed.status == OrderStatus.CANCELLED
    assert len(demo.order_service.list_orders()) == 5
    with pytest.raises(NotFoundError):
        demo.order_service.remove_order('6')


def test_query_orders_default_newest_first(demo):
    assert [o.id for o in demo.order_service.query_orders()] == ['6', '5', '4', '3', '2', '1']


def test_query_orders_search_and_filter(demo):
    service = demo.order_service
    assert [o.id for o in service.query_orders(search='john')] == ['4', '1']
    assert [o.id for o in service.query_orders(status='completed')] == ['3', '1']
    assert [o.id for o in service.query_orders(search='jane', status='pending')] == ['2']


def test_query_orders_sorting(demo):
    service = demo.order_service
    by_total = service.query_orders(sort_field='total', direction='asc')
    assert [o.total for o in by_total][:2] == [Decimal('799.00'), Decimal('999.00')]
    by_client = service.query_orders(sort_field='client', direction='asc')
    assert [o.client_id for o in by_client][:2] == ['2', '2']
    with pytest.raises(ValidationError):
        service.query_orders(sort_field='price')
    with pytest.raises(ValidationError):
        service.query_orders(direction='up')


def test_order_lines_with_removed_product(demo):
    order = demo.order_service.get_order('4')
    demo.product_repo.delete('2')
    lines = demo.order_service.order_lines(order)
    assert [(line['name'], line['price']) for line in lines] == [
        ('iPhone 14', Decimal('999.00')),
        ('Unknown Product', Decimal('0.00')),
    ]


def test_counts_and_revenue(demo):
    service = demo.order_service
    assert service.count_by_status() == {
        'pending': 1,
        'processing': 1,
        'ready_for_pickup': 1,
        'completed': 2,
        'cancelled': 1,
    }
    assert service.revenue() == Decimal('2298.00')


def test_quote(container):
    totals = container.order_service.quote([
        {'name': 'Screen', 'quantity': 2, 'unit_price': '10.00'},
        {'name': 'Battery', 'quantity': 1, 'unit_price': '25.00'},
    ])
    assert (totals.subtotal, totals.tax, totals.total) == (
        Decimal('45.00'), Decimal('9.00'), Decimal('54.00')
    )
    with pytest.raises(ValidationError):
        container.order_service.quote([{'name': 'Screen', 'quantity': 0, 'unit_price': 1}])
