# ==============================================================================
# DATOS DE DEMOSTRACIÓN
# ==============================================================================
# Clientes, tickets, productos, pedidos y facturas de ejemplo para probar
# la aplicación sin cargar nada a mano.
#
# Los registros se escriben directo en los repositorios con ids fijos
# ('1', '2', ...) y no generan auditoría.
# ==============================================================================

import logging
from datetime import timedelta
from typing import Any, Dict, List

from repair_pos.models.entities import Client, Invoice, Order, Product, Ticket

logger = logging.getLogger(__name__)

DEMO_CLIENTS: List[Dict[str, Any]] = [
    {'id': '1', 'name': 'John Doe', 'email': 'john.doe@example.com',
     'phone': '123-456-7890', 'address': '123 Main St'},
    {'id': '2', 'name': 'Jane Smith', 'email': 'jane.smith@example.com',
     'phone': '987-654-3210', 'address': '456 Elm St'},
    {'id': '3', 'name': 'Robert Jones', 'email': 'robert.jones@example.com',
     'phone': '555-123-4567', 'address': '789 Oak St'},
]

DEMO_TICKETS: List[Dict[str, Any]] = [
    {'id': '1', 'ticket_number': 'oct1234', 'client_id': '1', 'device_type': 'Mobile',
     'brand': 'Apple', 'model': 'iPhone 14', 'tasks': ['Screen Replacement'],
     'issue': 'Cracked screen', 'status': 'in-progress', 'cost': 150, 'technician_id': '1'},
    {'id': '2', 'ticket_number': 'oct5678', 'client_id': '2', 'device_type': 'Tablet',
     'brand': 'Samsung', 'model': 'Galaxy Tab S8', 'tasks': ['Battery Replacement'],
     'issue': 'Battery draining quickly', 'status': 'pending', 'cost': 100, 'technician_id': '2'},
    {'id': '3', 'ticket_number': 'oct9012', 'client_id': '3', 'device_type': 'PC',
     'brand': 'Dell', 'model': 'XPS 13', 'tasks': ['Software Installation'],
     'issue': 'Operating system not booting', 'status': 'completed', 'cost': 50, 'technician_id': '1'},
]

DEMO_PRODUCTS: List[Dict[str, Any]] = [
    {'id': '1', 'name': 'iPhone 14', 'category': 'Phones', 'price': 999, 'stock': 10,
     'sku': 'IP14-128',
     'description': 'The latest iPhone with a stunning display and powerful camera.',
     'image_url': 'https://example.com/iphone14.jpg'},
    {'id': '2', 'name': 'Samsung Galaxy Tab S8', 'category': 'Tablets', 'price': 799, 'stock': 5,
     'sku': 'SGT-S8', 'description': 'A powerful tablet for work and play.',
     'image_url': 'https://example.com/galaxytabs8.jpg'},
    {'id': '3', 'name': 'Dell XPS 13', 'category': 'Laptops', 'price': 1299, 'stock': 8,
     'sku': 'DXPS13', 'description': 'A lightweight and powerful laptop for professionals.',
     'image_url': 'https://example.com/dellxps13.jpg'},
]

# (datos, antigüedad respecto de ahora)
DEMO_ORDERS = [
    ({'id': '1', 'client_id': '1', 'items': [{'product_id': '1', 'quantity': 1}],
      'total': 999, 'status': 'completed'}, timedelta(days=7)),
    ({'id': '2', 'client_id': '2', 'items': [{'product_id': '2', 'quantity': 1}],
      'total': 799, 'status': 'pending'}, timedelta(days=3)),
    ({'id': '3', 'client_id': '3', 'items': [{'product_id': '3', 'quantity': 1}],
      'total': 1299, 'status': 'completed'}, timedelta(days=1)),
    ({'id': '4', 'client_id': '1',
      'items': [{'product_id': '1', 'quantity': 2}, {'product_id': '2', 'quantity': 1}],
      'total': 2797, 'status': 'processing'}, timedelta(hours=12)),
    ({'id': '5', 'client_id': '2', 'items': [{'product_id': '3', 'quantity': 1}],
      'total': 1299, 'status': 'ready_for_pickup'}, timedelta(hours=5)),
    ({'id': '6', 'client_id': '3',
      'items': [{'product_id': '1', 'quantity': 1}, {'product_id': '3', 'quantity': 1}],
      'total': 2298, 'status': 'cancelled'}, timedelta(hours=2)),
]

DEMO_INVOICES: List[Dict[str, Any]] = [
    {'id': '1', 'invoice_number': 'nov1234', 'client_id': '1',
     'items': [{'id': '1', 'name': 'Product 1', 'quantity': 1, 'price': 100},
               {'id': '2', 'name': 'Product 2', 'quantity': 2, 'price': 50}],
     'subtotal': 200, 'tax': 40, 'total': 240, 'status': 'pending'},
    {'id': '2', 'invoice_number': 'nov5678', 'client_id': '2',
     'items': [{'id': '3', 'name': 'Product 3', 'quantity': 1, 'price': 200}],
     'subtotal': 200, 'tax': 40, 'total': 240, 'status': 'completed'},
]


def load_demo_data(container) -> Dict[str, int]:
    """
    Carga los datos de ejemplo en un contenedor.

    Args:
        container: AppContainer (idealmente recién creado)

    Returns:
        Cantidad de registros cargados por entidad

    Raises:
        KeyError: Si alguno de los ids fijos ya existe
    """
    now = container.clock()

    for data in DEMO_CLIENTS:
        client = Client.from_dict(dict(data, created_at=now))
        container.client_repo.add(client.id, client)

    for data in DEMO_TICKETS:
        ticket = Ticket.from_dict(dict(data, created_at=now, updated_at=now))
        container.ticket_repo.add(ticket.id, ticket)

    for data in DEMO_PRODUCTS:
        product = Product.from_dict(data)
        container.product_repo.add(product.id, product)

    for data, age in DEMO_ORDERS:
        order = Order.from_dict(dict(data, created_at=now - age))
        container.order_repo.add(order.id, order)

    for data in DEMO_INVOICES:
        invoice = Invoice.from_dict(dict(data, date=now, created_at=now))
        container.invoice_repo.add(invoice.id, invoice)

    counts = {
        'clients': len(DEMO_CLIENTS),
        'tickets': len(DEMO_TICKETS),
        'products': len(DEMO_PRODUCTS),
        'orders': len(DEMO_ORDERS),
        'invoices': len(DEMO_INVOICES),
    }
    logger.info("Datos de demostración cargados: %s", counts)
    return counts
