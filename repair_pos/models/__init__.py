# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# entities.py  → Entidades del dominio (dataclasses) y estados (Enum)
# commands.py  → Comandos de entrada validados con pydantic
# ==============================================================================

from .entities import (
    # Clientes
    Client,

    # Catálogo
    CatalogSettings,
    DeviceModel,

    # Tickets
    Ticket,
    TicketStatus,

    # Productos
    Product,

    # Carrito y pedidos
    CartItem,
    Order,
    OrderStatus,

    # Facturas
    Invoice,
    InvoiceItem,
    InvoiceStatus,

    # Auditoría
    AuditLog,
    AuditType,
)
from .commands import (
    ClientCreate,
    ClientUpdate,
    InvoiceCreate,
    InvoiceItemInput,
    InvoiceUpdate,
    ProductCreate,
    ProductUpdate,
    TicketCreate,
    TicketUpdate,
    parse_command,
)

__all__ = [
    'Client',
    'CatalogSettings',
    'DeviceModel',
    'Ticket',
    'TicketStatus',
    'Product',
    'CartItem',
    'Order',
    'OrderStatus',
    'Invoice',
    'InvoiceItem',
    'InvoiceStatus',
    'AuditLog',
    'AuditType',
    'ClientCreate',
    'ClientUpdate',
    'InvoiceCreate',
    'InvoiceItemInput',
    'InvoiceUpdate',
    'ProductCreate',
    'ProductUpdate',
    'TicketCreate',
    'TicketUpdate',
    'parse_command',
]
