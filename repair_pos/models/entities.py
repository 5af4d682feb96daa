# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio del taller.
# Los vínculos entre entidades (client_id, product_id, brand_id) son
# referencias por identificador que se resuelven al leer, nunca punteros.
# ==============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from repair_pos.money import ZERO, money_str, to_money


# ==============================================================================
# ENUMERACIONES - Estados y tipos válidos
# ==============================================================================

class TicketStatus(str, Enum):
    """Estados de un ticket de reparación (sin grafo de transiciones)."""
    PENDING = 'pending'
    IN_PROGRESS = 'in-progress'
    COMPLETED = 'completed'


class OrderStatus(str, Enum):
    """Estados posibles de un pedido."""
    PENDING = 'pending'
    PROCESSING = 'processing'
    READY_FOR_PICKUP = 'ready_for_pickup'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class InvoiceStatus(str, Enum):
    """Estados posibles de una factura."""
    PENDING = 'pending'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class AuditType(str, Enum):
    """Tipos de eventos de auditoría."""
    CLIENTE = 'CLIENTE'
    TICKET = 'TICKET'
    CATALOGO = 'CATALOGO'
    PRODUCTO = 'PRODUCTO'
    STOCK = 'STOCK'
    PEDIDO = 'PEDIDO'
    FACTURA = 'FACTURA'


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_dt(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


# ==============================================================================
# CLIENTES
# ==============================================================================

@dataclass
class Client:
    """
    Cliente del taller.

    Attributes:
        id: Identificador único
        name: Nombre completo
        phone: Teléfono de contacto
        email: Correo (opcional)
        address: Dirección (opcional)
        created_at: Fecha de alta
    """
    id: str
    name: str
    phone: str
    email: str = ''
    address: str = ''
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'created_at': _iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Client':
        """Crea instancia desde diccionario."""
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            phone=data.get('phone', ''),
            email=data.get('email') or '',
            address=data.get('address') or '',
            created_at=_parse_dt(data.get('created_at')),
        )


# ==============================================================================
# CATÁLOGO DE DISPOSITIVOS
# ==============================================================================

@dataclass
class DeviceModel:
    """
    Modelo de dispositivo. brand_id es el nombre de la marca (referencia débil).
    """
    id: str
    name: str
    brand_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'brand_id': self.brand_id}


@dataclass
class CatalogSettings:
    """
    Vocabulario controlado usado para clasificar tickets.

    Attributes:
        device_types: Tipos de dispositivo (Mobile, Tablet, ...)
        brands: Marcas
        models: Modelos, cada uno asociado a una marca
        tasks: Tareas de reparación facturables
    """
    device_types: List[str] = field(default_factory=list)
    brands: List[str] = field(default_factory=list)
    models: List[DeviceModel] = field(default_factory=list)
    tasks: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'device_types': list(self.device_types),
            'brands': list(self.brands),
            'models': [m.to_dict() for m in self.models],
            'tasks': list(self.tasks),
        }


# ==============================================================================
# TICKETS DE REPARACIÓN
# ==============================================================================

@dataclass
class Ticket:
    """
    Trabajo de reparación de un dispositivo traído por un cliente.

    device_type, brand y model son copias del texto del catálogo: renombrar
    o eliminar una entrada del catálogo no modifica tickets existentes.
    """
    id: str
    ticket_number: str
    client_id: str
    device_type: str
    brand: str
    model: str
    tasks: List[str] = field(default_factory=list)
    issue: Optional[str] = None
    status: TicketStatus = TicketStatus.PENDING
    cost: Decimal = ZERO
    technician_id: str = ''
    passcode: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable."""
        return {
            'id': self.id,
            'ticket_number': self.ticket_number,
            'client_id': self.client_id,
            'device_type': self.device_type,
            'brand': self.brand,
            'model': self.model,
            'tasks': list(self.tasks),
            'issue': self.issue,
            'status': self.status.value,
            'cost': money_str(self.cost),
            'technician_id': self.technician_id,
            'passcode': self.passcode,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ticket':
        """Crea instancia desde diccionario."""
        return cls(
            id=data.get('id', ''),
            ticket_number=data.get('ticket_number', ''),
            client_id=data.get('client_id', ''),
            device_type=data.get('device_type', ''),
            brand=data.get('brand', ''),
            model=data.get('model', ''),
            tasks=list(data.get('tasks', [])),
            issue=data.get('issue'),
            status=TicketStatus(data.get('status', 'pending')),
            cost=to_money(data.get('cost', 0)),
            technician_id=data.get('technician_id', ''),
            passcode=data.get('passcode'),
            created_at=_parse_dt(data.get('created_at')),
            updated_at=_parse_dt(data.get('updated_at')),
        )


# ==============================================================================
# PRODUCTOS
# ==============================================================================

@dataclass
class Product:
    """
    Producto a la venta.

    El stock puede quedar negativo: adjust_stock no lo limita a cero.
    """
    id: str
    name: str
    category: str = ''
    price: Decimal = ZERO
    stock: int = 0
    sku: str = ''
    description: str = ''
    image_url: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable."""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'price': money_str(self.price),
            'stock': self.stock,
            'sku': self.sku,
            'description': self.description,
            'image_url': self.image_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        """Crea instancia desde diccionario."""
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            category=data.get('category', ''),
            price=to_money(data.get('price', 0)),
            stock=int(data.get('stock', 0)),
            sku=data.get('sku', ''),
            description=data.get('description', ''),
            image_url=data.get('image_url', ''),
        )


# ==============================================================================
# CARRITO Y PEDIDOS
# ==============================================================================

@dataclass
class CartItem:
    """Ítem del carrito: una entrada por producto."""
    product_id: str
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return {'product_id': self.product_id, 'quantity': self.quantity}


@dataclass
class Order:
    """
    Pedido de punto de venta.

    Attributes:
        id: Identificador único
        items: Copia del carrito en el momento de la creación
        total: Total fijado al crear (con impuestos)
        status: Estado actual
        client_id: Cliente que realiza el pedido
        created_at: Fecha de creación
    """
    id: str
    client_id: str
    items: List[CartItem] = field(default_factory=list)
    total: Decimal = ZERO
    status: OrderStatus = OrderStatus.PENDING
    created_at: Optional[datetime] = None

    @property
    def item_count(self) -> int:
        """Unidades totales del pedido."""
        return sum(item.quantity for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable."""
        return {
            'id': self.id,
            'client_id': self.client_id,
            'items': [item.to_dict() for item in self.items],
            'total': money_str(self.total),
            'status': self.status.value,
            'created_at': _iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        """Crea instancia desde diccionario."""
        return cls(
            id=data.get('id', ''),
            client_id=data.get('client_id', ''),
            items=[
                CartItem(product_id=i['product_id'], quantity=int(i['quantity']))
                for i in data.get('items', [])
            ],
            total=to_money(data.get('total', 0)),
            status=OrderStatus(data.get('status', 'pending')),
            created_at=_parse_dt(data.get('created_at')),
        )


# ==============================================================================
# FACTURAS
# ==============================================================================

@dataclass
class InvoiceItem:
    """Línea de factura."""
    id: str
    name: str
    quantity: int
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        """Total de la línea (quantity * price)."""
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'quantity': self.quantity,
            'price': money_str(self.price),
        }


@dataclass
class Invoice:
    """
    Documento de cobro con totales incluyendo impuestos.
    """
    id: str
    invoice_number: str
    client_id: str
    date: Optional[datetime] = None
    items: List[InvoiceItem] = field(default_factory=list)
    subtotal: Decimal = ZERO
    tax: Decimal = ZERO
    total: Decimal = ZERO
    status: InvoiceStatus = InvoiceStatus.PENDING
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario serializable."""
        return {
            'id': self.id,
            'invoice_number': self.invoice_number,
            'client_id': self.client_id,
            'date': _iso(self.date),
            'items': [item.to_dict() for item in self.items],
            'subtotal': money_str(self.subtotal),
            'tax': money_str(self.tax),
            'total': money_str(self.total),
            'status': self.status.value,
            'created_at': _iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Invoice':
        """Crea instancia desde diccionario."""
        return cls(
            id=data.get('id', ''),
            invoice_number=data.get('invoice_number', ''),
            client_id=data.get('client_id', ''),
            date=_parse_dt(data.get('date')),
            items=[
                InvoiceItem(
                    id=i.get('id', ''),
                    name=i.get('name', ''),
                    quantity=int(i.get('quantity', 0)),
                    price=to_money(i.get('price', 0)),
                )
                for i in data.get('items', [])
            ],
            subtotal=to_money(data.get('subtotal', 0)),
            tax=to_money(data.get('tax', 0)),
            total=to_money(data.get('total', 0)),
            status=InvoiceStatus(data.get('status', 'pending')),
            created_at=_parse_dt(data.get('created_at')),
        )


# ==============================================================================
# AUDITORÍA
# ==============================================================================

@dataclass
class AuditLog:
    """
    Registro de auditoría.

    Attributes:
        type: Tipo de evento (TICKET, PEDIDO, STOCK, etc.)
        message: Mensaje descriptivo humanizado
        timestamp: Fecha y hora del evento
        related_id: ID relacionado (ticket_number, product id, etc.)
        details: Detalles adicionales
    """
    type: AuditType
    message: str
    timestamp: Optional[datetime] = None
    related_id: str = ''
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'message': self.message,
            'timestamp': _iso(self.timestamp),
            'related_id': self.related_id,
            'details': self.details,
        }
