import pytest

from repair_pos import AppContainer
from repair_pos.exceptions import NotFoundError, ValidationError
from repair_pos.models import AuditType


def test_default_vocabulary(container):
    catalog = container.catalog_service
    assert catalog.device_types() == ['Mobile', 'Tablet', 'PC', 'Console']
    assert catalog.brands() == ['Apple', 'Samsung', 'Huawei']
    assert [(m.name, m.brand_id) for m in catalog.models()] == [
        ('iPhone 14', 'Apple'),
        ('Galaxy S23', 'Samsung'),
    ]
    assert catalog.tasks() == ['Battery', 'Screen', 'Motherboard', 'Software', 'Camera', 'Speaker']


def test_container_without_seed_starts_empty():
    settings = AppContainer(seed_catalog=False).catalog_service.get_settings()
    assert settings.device_types == []
    assert settings.brands == []
    assert settings.models == []
    assert settings.tasks == []


def test_remove_brand_drops_its_models(container):
    catalog = container.catalog_service
    catalog.remove_brand('Apple')

    assert 'Apple' not in catalog.brands()
    assert catalog.models_for_brand('Apple') == []
    assert [m.name for m in catalog.models()] == ['Galaxy S23']


def test_update_brand_rewrites_model_brand(container):
    catalog = container.catalog_service
    before = catalog.models()

    catalog.update_brand('Apple', 'Apple Inc.')

    after = catalog.models()
    assert len(after) == len(before)
    renamed = [m for m in after if m.name == 'iPhone 14']
    assert renamed[0].brand_id == 'Apple Inc.'
    assert catalog.brands() == ['Apple Inc.', 'Samsung', 'Huawei']
    assert catalog.models_for_brand('Apple') == []


def test_catalog_changes_do_not_touch_tickets(container, client_id):
    number = container.ticket_service.create_ticket({
        'client_id': client_id,
        'device_type': 'Mobile',
        'brand': 'Apple',
        'model': 'iPhone 14',
        'tasks': ['Screen'],
    })
    catalog = container.catalog_service
    catalog.update_brand('Apple', 'Apple Inc.')
    catalog.remove_device_type('Mobile')
    catalog.update_task('Screen', 'Display')

    ticket = container.ticket_service.get_by_number(number)
    assert (ticket.device_type, ticket.brand, ticket.tasks) == ('Mobile', 'Apple', ['Screen'])


def test_add_accepts_duplicates_and_ensure_does_not(container):
    catalog = container.catalog_service
    catalog.add_task('Battery')
    assert catalog.tasks().count('Battery') == 2

    catalog.ensure_brand('Samsung')
    catalog.ensure_brand('Xiaomi')
    assert catalog.brands() == ['Apple', 'Samsung', 'Huawei', 'Xiaomi']
    assert catalog.has_brand('Xiaomi')


def test_blank_values_are_rejected(container):
    catalog = container.catalog_service
    with pytest.raises(ValidationError):
        catalog.add_device_type('   ')
    with pytest.raises(ValidationError):
        catalog.update_brand('Apple', '')
    with pytest.raises(ValidationError):
        catalog.add_model('', 'Apple')


def test_missing_values_raise_not_found(container):
    catalog = container.catalog_service
    with pytest.raises(NotFoundError):
        catalog.remove_brand('Nokia')
    with pytest.raises(NotFoundError):
        catalog.update_task('Cleaning', 'Deep cleaning')
    with pytest.raises(NotFoundError):
        catalog.remove_model('missing')
    with pytest.raises(NotFoundError):
        catalog.update_model('missing', 'X')


def test_model_lifecycle(container):
    catalog = container.catalog_service
    model = catalog.add_model('P60 Pro', 'Huawei')
    assert model.id
    assert [m.name for m in catalog.models_for_brand('Huawei')] == ['P60 Pro']

    renamed = catalog.update_model(model.id, 'P60 Pro+')
    assert (renamed.id, renamed.brand_id, renamed.name) == (model.id, 'Huawei', 'P60 Pro+')

    catalog.remove_model(model.id)
    assert catalog.models_for_brand('Huawei') == []


def test_search_is_case_insensitive(container):
    catalog = container.catalog_service
    assert catalog.search_device_types('TAB') == ['Tablet']
    assert catalog.search_brands('sung') == ['Samsung']
    assert catalog.search_brands('') == catalog.brands()


def test_settings_snapshot_is_a_copy(container):
    snapshot = container.catalog_service.get_settings()
    snapshot.brands.append('Hacked')
    assert 'Hacked' not in container.catalog_service.brands()


def test_catalog_changes_are_audited(container):
    container.catalog_service.update_brand('Apple', 'Apple Inc.')
    logs = container.audit_service.get_logs(AuditType.CATALOGO)
    assert logs[0].details == {'action': 'rename', 'kind': 'brand', 'new_value': 'Apple Inc.'}
    assert 'Apple Inc.' in logs[0].message
