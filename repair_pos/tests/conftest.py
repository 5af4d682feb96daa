import random
from datetime import datetime, timedelta, timezone

import pytest

from repair_pos import AppContainer
from repair_pos.demo_data import load_demo_data


class FakeClock:
    """Reloj controlable: devuelve siempre `now` hasta que se lo mueve."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 10, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def container(clock, rng):
    return AppContainer(clock=clock, rng=rng)


@pytest.fixture
def demo(container):
    """Contenedor con los datos de demostración cargados."""
    load_demo_data(container)
    return container


@pytest.fixture
def client_id(container):
    client = container.client_service.add_client({'name': 'Ana Pérez', 'phone': '555-0101'})
    return client.id


@pytest.fixture
def product(container):
    return container.inventory_service.add_product({
        'name': 'Cable USB-C',
        'category': 'Accessories',
        'price': '10.00',
        'stock': 5,
    })
