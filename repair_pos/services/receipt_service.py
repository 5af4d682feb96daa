# ==============================================================================
# SERVICIO DE COMPROBANTES
# ==============================================================================
# Vista plana e imprimible de un pedido o una factura, resuelta con los
# datos actuales de clientes y productos.
#
# Pedidos:
# - invoice_number = "ORD-{id}"
# - Productos inexistentes → "Unknown Product" con precio 0
# - total = total guardado en el pedido (no se recalcula)
# ==============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from repair_pos.config import DEFAULT_SETTINGS, Settings
from repair_pos.money import money_str, quantize
from repair_pos.services.client_service import ClientService
from repair_pos.services.invoice_service import InvoiceService
from repair_pos.services.order_service import OrderService

ORDER_PREFIX = 'ORD-'


@dataclass
class ReceiptCustomer:
    name: str
    email: str
    address: str
    phone: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'name': self.name,
            'email': self.email,
            'address': self.address,
            'phone': self.phone,
        }


@dataclass
class ReceiptLine:
    id: str
    name: str
    quantity: int
    price: Decimal
    sku: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'sku': self.sku,
            'quantity': self.quantity,
            'price': money_str(self.price),
            'line_total': money_str(quantize(self.price * self.quantity)),
        }


@dataclass
class Receipt:
    """
    Comprobante listo para mostrar o imprimir.

    Attributes:
        invoice_number: Número de factura u "ORD-{id}" para pedidos
        customer: Datos del cliente, None si ya no existe
        payment_method / payment_status: Valores por defecto configurables
    """
    invoice_number: str
    date: Optional[datetime]
    customer: Optional[ReceiptCustomer]
    items: List[ReceiptLine] = field(default_factory=list)
    subtotal: Decimal = Decimal('0.00')
    tax: Decimal = Decimal('0.00')
    total: Decimal = Decimal('0.00')
    payment_method: str = ''
    payment_status: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'invoice_number': self.invoice_number,
            'date': self.date.isoformat() if self.date else None,
            'customer': self.customer.to_dict() if self.customer else None,
            'items': [line.to_dict() for line in self.items],
            'subtotal': money_str(self.subtotal),
            'tax': money_str(self.tax),
            'total': money_str(self.total),
            'payment_method': self.payment_method,
            'payment_status': self.payment_status,
        }


class ReceiptService:
    """Arma comprobantes de pedidos y facturas."""

    def __init__(
        self,
        client_service: ClientService,
        order_service: OrderService,
        invoice_service: InvoiceService,
        settings: Settings = DEFAULT_SETTINGS
    ):
        self.client_service = client_service
        self.order_service = order_service
        self.invoice_service = invoice_service
        self.settings = settings

    def _customer(self, client_id: str) -> Optional[ReceiptCustomer]:
        client = self.client_service.find_client(client_id)
        if client is None:
            return None
        return ReceiptCustomer(
            name=client.name,
            email=client.email,
            address=client.address,
            phone=client.phone,
        )

    def for_order(self, order_id: str) -> Receipt:
        """
        Comprobante de un pedido.

        Raises:
            NotFoundError: Si el pedido no existe
        """
        order = self.order_service.get_order(order_id)
        lines = [
            ReceiptLine(
                id=line['id'],
                name=line['name'],
                quantity=line['quantity'],
                price=line['price'],
                sku=line['sku'],
            )
            for line in self.order_service.order_lines(order)
        ]
        totals = self.order_service.order_totals(order)
        return Receipt(
            invoice_number=f"{ORDER_PREFIX}{order.id}",
            date=order.created_at,
            customer=self._customer(order.client_id),
            items=lines,
            subtotal=totals.subtotal,
            tax=totals.tax,
            total=order.total,
            payment_method=self.settings.receipt_payment_method,
            payment_status=self.settings.receipt_payment_status,
        )

    def for_invoice(self, invoice_id: str) -> Receipt:
        """
        Comprobante de una factura con sus montos guardados.

        Raises:
            NotFoundError: Si la factura no existe
        """
        invoice = self.invoice_service.get_invoice(invoice_id)
        return Receipt(
            invoice_number=invoice.invoice_number,
            date=invoice.date,
            customer=self._customer(invoice.client_id),
            items=[
                ReceiptLine(id=i.id, name=i.name, quantity=i.quantity, price=i.price)
                for i in invoice.items
            ],
            subtotal=invoice.subtotal,
            tax=invoice.tax,
            total=invoice.total,
            payment_method=self.settings.receipt_payment_method,
            payment_status=self.settings.receipt_payment_status,
        )
