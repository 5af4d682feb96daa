# ==============================================================================
# CONFIGURACIÓN - Parámetros de negocio del sistema
# ==============================================================================
# Valores por defecto agrupados en una dataclass inmutable.
# El contenedor (app_container.py) recibe una instancia de Settings y la
# entrega a cada servicio que la necesita.
# ==============================================================================

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal


# ═══════════════════════════════════════════════════════════════════════════
# VALORES POR DEFECTO
# ═══════════════════════════════════════════════════════════════════════════

TAX_RATE = Decimal('0.20')          # IVA 20%
CURRENCY_PLACES = Decimal('0.01')   # Redondeo a céntimos
LOW_STOCK_THRESHOLD = 5             # stock < 5 → alerta
POPULAR_TASKS_LIMIT = 6
RECENT_ITEMS_LIMIT = 5
CODE_MAX_ATTEMPTS = 10              # Reintentos ante colisión de códigos
AUDIT_MAX_ENTRIES = 10000

RECEIPT_PAYMENT_METHOD = 'Cash'
RECEIPT_PAYMENT_STATUS = 'Paid'

DEFAULT_DEVICE_TYPES = ('Mobile', 'Tablet', 'PC', 'Console')
DEFAULT_BRANDS = ('Apple', 'Samsung', 'Huawei')
DEFAULT_MODELS = (
    ('iPhone 14', 'Apple'),
    ('Galaxy S23', 'Samsung'),
)
DEFAULT_TASKS = ('Battery', 'Screen', 'Motherboard', 'Software', 'Camera', 'Speaker')
DEFAULT_CATEGORIES = ('Phones', 'Tablets', 'Laptops', 'Accessories')


@dataclass(frozen=True)
class Settings:
    """
    Parámetros de negocio.

    Attributes:
        tax_rate: Tasa de impuesto sobre el subtotal
        low_stock_threshold: Productos con stock menor se consideran bajos
        popular_tasks_limit: Cantidad de tareas en "tareas populares"
        recent_items_limit: Tamaño de las listas "recientes" del panel
        code_max_attempts: Intentos para generar un código no usado
        strict_order_totals: Recalcular y validar el total de cada pedido
        enforce_references: Rechazar clientId/productId inexistentes
        audit_max_entries: Máximo de registros de auditoría en memoria
    """
    tax_rate: Decimal = TAX_RATE
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    popular_tasks_limit: int = POPULAR_TASKS_LIMIT
    recent_items_limit: int = RECENT_ITEMS_LIMIT
    code_max_attempts: int = CODE_MAX_ATTEMPTS
    strict_order_totals: bool = False
    enforce_references: bool = True
    audit_max_entries: int = AUDIT_MAX_ENTRIES
    receipt_payment_method: str = RECEIPT_PAYMENT_METHOD
    receipt_payment_status: str = RECEIPT_PAYMENT_STATUS

    def with_overrides(self, **changes) -> 'Settings':
        """Retorna una copia con los campos indicados modificados."""
        return replace(self, **changes)


DEFAULT_SETTINGS = Settings()


def default_clock() -> datetime:
    """Hora local con zona horaria (la usan todos los servicios por defecto)."""
    return datetime.now().astimezone()
