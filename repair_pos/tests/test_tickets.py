from decimal import Decimal

import pytest

from repair_pos import DEFAULT_SETTINGS, AppContainer
from repair_pos.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from repair_pos.models import TicketStatus
from repair_pos.services.identifier import CODE_PATTERN


def _ticket_data(client_id, **overrides):
    data = {
        'client_id': client_id,
        'device_type': 'Mobile',
        'brand': 'Apple',
        'model': 'iPhone 14',
        'tasks': ['Screen'],
        'issue': 'Cracked screen',
        'cost': '150',
    }
    data.update(overrides)
    return data


def test_create_assigns_number_and_timestamps(container, client_id, clock):
    number = container.ticket_service.create_ticket(_ticket_data(client_id))

    assert CODE_PATTERN.match(number)
    assert number.startswith('oct')
    ticket = container.ticket_service.get_by_number(number)
    assert ticket.created_at == ticket.updated_at == clock.now
    assert ticket.status == TicketStatus.PENDING
    assert ticket.cost == Decimal('150.00')


def test_many_tickets_get_distinct_valid_numbers(container, client_id):
    numbers = [container.ticket_service.create_ticket(_ticket_data(client_id)) for _ in range(50)]
    assert len(set(numbers)) == 50
    assert all(CODE_PATTERN.match(n) for n in numbers)


def test_updated_at_never_goes_backwards(container, client_id, clock):
    service = container.ticket_service
    ticket = service.get_by_number(service.create_ticket(_ticket_data(client_id)))

    clock.advance(minutes=5)
    first = service.update_ticket(ticket.id, {'issue': 'Also no sound'})
    assert first.updated_at == clock.now
    assert first.created_at == ticket.created_at

    clock.advance(hours=-1)
    second = service.set_status(ticket.id, 'in-progress')
    assert second.updated_at >= first.updated_at
    assert second.status == TicketStatus.IN_PROGRESS


def test_any_status_can_be_set(container, client_id):
    service = container.ticket_service
    ticket = service.get_by_number(service.create_ticket(_ticket_data(client_id, status='completed')))
    assert service.set_status(ticket.id, TicketStatus.PENDING).status == TicketStatus.PENDING


def test_unknown_client_is_rejected(container):
    with pytest.raises(InvalidReferenceError):
        container.ticket_service.create_ticket(_ticket_data('ghost'))
    assert container.ticket_service.list_tickets() == []


def test_unknown_client_allowed_when_references_are_not_enforced(clock, rng):
    container = AppContainer(
        settings=DEFAULT_SETTINGS.with_overrides(enforce_references=False),
        clock=clock,
        rng=rng,
    )
    number = container.ticket_service.create_ticket(_ticket_data('ghost'))
    assert container.ticket_service.get_by_number(number).client_id == 'ghost'


@pytest.mark.parametrize('overrides', [
    {'brand': ''},
    {'model': '   '},
    {'device_type': None},
    {'cost': '-1'},
    {'status': 'waiting'},
])
def test_invalid_ticket_data(container, client_id, overrides):
    with pytest.raises(ValidationError):
        container.ticket_service.create_ticket(_ticket_data(client_id, **overrides))


def test_update_to_unknown_client_is_rejected(container, client_id):
    service = container.ticket_service
    ticket = service.get_by_number(service.create_ticket(_ticket_data(client_id)))
    with pytest.raises(InvalidReferenceError):
        service.update_ticket(ticket.id, {'client_id': 'ghost'})
    assert service.get_ticket(ticket.id).client_id == client_id


def test_update_missing_ticket(container):
    with pytest.raises(NotFoundError):
        container.ticket_service.update_ticket('missing', {'issue': 'x'})


def test_tasks_are_deduplicated(container, client_id):
    service = container.ticket_service
    number = service.create_ticket(_ticket_data(client_id, tasks=['Screen', 'Battery', 'Screen']))
    assert service.get_by_number(number).tasks == ['Screen', 'Battery']


def test_popular_tasks(container, client_id):
    service = container.ticket_service
    for tasks in (
        ['Screen', 'Battery'],
        ['Battery'],
        ['Camera', 'Battery', 'Screen'],
        ['Speaker', 'Software', 'Motherboard', 'Charging port'],
    ):
        service.create_ticket(_ticket_data(client_id, tasks=tasks))

    assert service.popular_tasks() == ['Battery', 'Screen', 'Camera', 'Speaker', 'Software', 'Motherboard']
    assert service.popular_tasks(limit=2) == ['Battery', 'Screen']


def test_filter_and_count_by_status(demo):
    service = demo.ticket_service
    assert [t.ticket_number for t in service.list_tickets('pending')] == ['oct5678']
    assert len(service.list_tickets('all')) == 3
    assert service.count_by_status() == {'pending': 1, 'in-progress': 1, 'completed': 1}
    with pytest.raises(ValidationError):
        service.list_tickets('archived')


def test_tickets_for_client(demo):
    assert [t.ticket_number for t in demo.ticket_service.tickets_for_client('3')] == ['oct9012']


def test_returned_tickets_are_copies(container, client_id):
    service = container.ticket_service
    ticket = service.get_by_number(service.create_ticket(_ticket_data(client_id)))
    ticket.tasks.append('Tampered')
    assert service.get_ticket(ticket.id).tasks == ['Screen']


def test_update_can_clear_optional_fields(container, client_id):
    service = container.ticket_service
    number = service.create_ticket(_ticket_data(client_id, passcode='1234', technician_id='t1'))
    ticket = service.get_by_number(number)

    updated = service.update_ticket(ticket.id, {'passcode': None, 'issue': None, 'technician_id': None})

    assert updated.passcode is None
    assert updated.issue is None
    assert updated.technician_id == ''
    assert service.get_ticket(ticket.id).passcode is None


@pytest.mark.parametrize('field', ['brand', 'client_id', 'status', 'cost', 'tasks'])
def test_update_rejects_null_for_required_fields(container, client_id, field):
    service = container.ticket_service
    ticket = service.get_by_number(service.create_ticket(_ticket_data(client_id)))
    with pytest.raises(ValidationError):
        service.update_ticket(ticket.id, {field: None})
    assert service.get_ticket(ticket.id) == ticket
