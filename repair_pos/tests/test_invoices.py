from decimal import Decimal

import pytest

from repair_pos.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from repair_pos.models import AuditType, InvoiceStatus
from repair_pos.services.identifier import CODE_PATTERN

ITEMS = [
    {'name': 'Screen', 'quantity': 2, 'price': '10.00'},
    {'name': 'Battery', 'quantity': 1, 'price': '25.00'},
]


def test_add_invoice_computes_totals(container, client_id, clock):
    invoice = container.invoice_service.add_invoice({'client_id': client_id, 'items': ITEMS})

    assert CODE_PATTERN.match(invoice.invoice_number)
    assert (invoice.subtotal, invoice.tax, invoice.total) == (
        Decimal('45.00'), Decimal('9.00'), Decimal('54.00')
    )
    assert invoice.status == InvoiceStatus.PENDING
    assert invoice.date == invoice.created_at == clock.now
    assert all(item.id for item in invoice.items)


def test_add_invoice_stores_given_totals(container, client_id):
    invoice = container.invoice_service.add_invoice({
        'client_id': client_id,
        'items': ITEMS,
        'subtotal': '40.00',
        'tax': '8.00',
        'total': '48.00',
        'status': 'completed',
    })
    assert (invoice.subtotal, invoice.tax, invoice.total) == (
        Decimal('40.00'), Decimal('8.00'), Decimal('48.00')
    )
    assert invoice.status == InvoiceStatus.COMPLETED


@pytest.mark.parametrize('items', [
    [],
    [{'name': '', 'quantity': 1, 'price': 1}],
    [{'name': 'X', 'quantity': 0, 'price': 1}],
    [{'name': 'X', 'quantity': 1, 'price': 0}],
])
def test_invalid_items(container, client_id, items):
    with pytest.raises(ValidationError):
        container.invoice_service.add_invoice({'client_id': client_id, 'items': items})
    assert container.invoice_service.list_invoices() == []


def test_unknown_client(container):
    with pytest.raises(InvalidReferenceError):
        container.invoice_service.add_invoice({'client_id': 'ghost', 'items': ITEMS})


def test_update_items_recomputes_totals(container, client_id):
    service = container.invoice_service
    invoice = service.add_invoice({'client_id': client_id, 'items': ITEMS})

    updated = service.update_invoice(invoice.id, {
        'items': [{'name': 'Camera', 'quantity': 1, 'price': '100'}],
    })
    assert (updated.subtotal, updated.tax, updated.total) == (
        Decimal('100.00'), Decimal('20.00'), Decimal('120.00')
    )
    assert updated.invoice_number == invoice.invoice_number
    assert service.get_invoice(invoice.id) == updated


def test_update_status(demo):
    service = demo.invoice_service
    assert service.update_invoice_status('1', 'cancelled').status == InvoiceStatus.CANCELLED
    with pytest.raises(ValidationError):
        service.update_invoice_status('1', 'refunded')
    with pytest.raises(NotFoundError):
        service.update_invoice_status('missing', 'completed')


def test_list_and_lookup(demo):
    service = demo.invoice_service
    assert [i.invoice_number for i in service.list_invoices('completed')] == ['nov5678']
    assert len(service.list_invoices('all')) == 2
    assert service.get_by_number('nov1234').id == '1'
    with pytest.raises(NotFoundError):
        service.get_by_number('dec0000')


def test_create_from_order(demo):
    invoice = demo.invoice_service.create_from_order('4')
    assert invoice.client_id == '1'
    assert [(i.name, i.quantity, i.price) for i in invoice.items] == [
        ('iPhone 14', 2, Decimal('999.00')),
        ('Samsung Galaxy Tab S8', 1, Decimal('799.00')),
    ]
    assert invoice.subtotal == Decimal('2797.00')
    assert invoice.total == Decimal('3356.40')


def test_invoice_creation_is_audited(container, client_id):
    invoice = container.invoice_service.add_invoice({'client_id': client_id, 'items': ITEMS})
    entry = container.audit_service.get_logs(AuditType.FACTURA)[0]
    assert entry.related_id == invoice.invoice_number
    assert entry.details['total'] == '54.00'


def test_update_can_clear_date(container, client_id):
    service = container.invoice_service
    invoice = service.add_invoice({'client_id': client_id, 'items': ITEMS})
    updated = service.update_invoice(invoice.id, {'date': None})
    assert updated.date is None
    assert updated.total == invoice.total

    with pytest.raises(ValidationError):
        service.update_invoice(invoice.id, {'total': None})
