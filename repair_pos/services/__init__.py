# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio del taller.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios
# 2. Aplican reglas de negocio y validaciones antes de mutar
# 3. La presentación solo llama a servicios
# 4. Los servicios reciben repositorios y colaboradores por constructor
#
# ESTRUCTURA:
# ├── identifier.py        → Números de ticket y factura ({mes}{NNNN})
# ├── pricing.py           → Subtotal, impuesto y total en Decimal
# ├── audit_service.py     → Registro de actividad
# ├── catalog_service.py   → Tipos, marcas, modelos y tareas
# ├── client_service.py    → Clientes
# ├── ticket_service.py    → Tickets de reparación
# ├── inventory_service.py → Productos y stock
# ├── cart_service.py      → Carrito de compras
# ├── order_service.py     → Pedidos
# ├── invoice_service.py   → Facturas
# ├── receipt_service.py   → Comprobantes imprimibles
# └── stats_service.py     → Resumen del panel
# ==============================================================================

from repair_pos.services.identifier import generate_code, generate_unique_code, is_valid_code
from repair_pos.services.pricing import LineItem, Totals, compute_totals, validate_line_items
from repair_pos.services.audit_service import AuditService
from repair_pos.services.catalog_service import CatalogService
from repair_pos.services.client_service import ClientService
from repair_pos.services.ticket_service import TicketService
from repair_pos.services.inventory_service import InventoryService
from repair_pos.services.cart_service import CartService
from repair_pos.services.order_service import OrderService
from repair_pos.services.invoice_service import InvoiceService
from repair_pos.services.receipt_service import Receipt, ReceiptService
from repair_pos.services.stats_service import StatsService

__all__ = [
    'generate_code',
    'generate_unique_code',
    'is_valid_code',
    'LineItem',
    'Totals',
    'compute_totals',
    'validate_line_items',
    'AuditService',
    'CatalogService',
    'ClientService',
    'TicketService',
    'InventoryService',
    'CartService',
    'OrderService',
    'InvoiceService',
    'Receipt',
    'ReceiptService',
    'StatsService',
]
