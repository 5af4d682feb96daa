# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula el almacenamiento (en memoria, vive con el proceso).
#
# ESTRUCTURA:
# ├── interfaces.py           → Protocolos (contratos)
# ├── base.py                 → Clases base (DictRepository, ListRepository)
# ├── client_repository.py    → Clientes
# ├── catalog_repository.py   → Tipos, marcas, modelos y tareas
# ├── ticket_repository.py    → Tickets de reparación
# ├── product_repository.py   → Productos y stock
# ├── order_repository.py     → Pedidos y carrito
# ├── invoice_repository.py   → Facturas
# └── audit_repository.py     → Registro de actividad
# ==============================================================================

from .interfaces import (
    IAuditRepository,
    ICartRepository,
    ICatalogRepository,
)

from .base import BaseRepository, DictRepository, ListRepository, new_id
from .client_repository import ClientRepository
from .catalog_repository import CatalogRepository
from .ticket_repository import TicketRepository
from .product_repository import ProductRepository
from .order_repository import CartRepository, OrderRepository
from .invoice_repository import InvoiceRepository
from .audit_repository import AuditRepository

__all__ = [
    # Interfaces
    'IAuditRepository',
    'ICartRepository',
    'ICatalogRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',
    'ListRepository',
    'new_id',

    # Implementaciones
    'ClientRepository',
    'CatalogRepository',
    'TicketRepository',
    'ProductRepository',
    'CartRepository',
    'OrderRepository',
    'InvoiceRepository',
    'AuditRepository',
]
