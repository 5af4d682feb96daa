import logging

from repair_pos import AppContainer, DEFAULT_SETTINGS
from repair_pos.models import AuditType


def test_logs_are_newest_first_and_filterable(container, client_id, product):
    container.inventory_service.adjust_stock(product.id, 2)

    logs = container.audit_service.get_logs()
    assert [entry.type for entry in logs] == [AuditType.STOCK, AuditType.PRODUCTO, AuditType.CLIENTE]
    assert container.audit_service.get_logs(limit=1)[0].type == AuditType.STOCK
    assert container.audit_service.get_logs(AuditType.CLIENTE)[0].related_id == client_id


def test_log_is_capped(clock):
    container = AppContainer(settings=DEFAULT_SETTINGS.with_overrides(audit_max_entries=3), clock=clock)
    for name in 'ABCDE':
        container.client_service.add_client({'name': name, 'phone': '1'})

    logs = container.audit_service.get_logs()
    assert len(logs) == 3
    assert logs[0].message == 'Cliente E registrado'


def test_events_are_also_logged(container, caplog):
    with caplog.at_level(logging.INFO, logger='repair_pos'):
        container.client_service.add_client({'name': 'Ana', 'phone': '1'})
    assert '[CLIENTE] Cliente Ana registrado' in caplog.text


def test_entries_serialize(container, client_id, clock):
    data = container.audit_service.get_logs()[0].to_dict()
    assert data['type'] == 'CLIENTE'
    assert data['timestamp'] == clock.now.isoformat()
