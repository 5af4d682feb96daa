# ==============================================================================
# SERVICIO DE FACTURAS
# ==============================================================================
# Emisión y modificación de facturas.
#
# REGLAS:
# - El número de factura ({mes}{NNNN}) es único entre facturas
# - subtotal/tax/total se calculan desde los items cuando no se envían;
#   si se envían se guardan tal cual
# - Cambiar los items recalcula los totales no enviados en el mismo cambio
# ==============================================================================

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Union

from repair_pos.config import DEFAULT_SETTINGS, Settings, default_clock
from repair_pos.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from repair_pos.models.commands import InvoiceCreate, InvoiceItemInput, InvoiceUpdate, parse_command
from repair_pos.models.entities import Invoice, InvoiceItem, InvoiceStatus
from repair_pos.repositories.base import new_id
from repair_pos.repositories.invoice_repository import InvoiceRepository
from repair_pos.services.audit_service import AuditService
from repair_pos.services.client_service import ClientService
from repair_pos.services.identifier import generate_unique_code
from repair_pos.services.order_service import OrderService
from repair_pos.services.pricing import Totals, compute_totals

logger = logging.getLogger(__name__)

STATUS_ALL = 'all'


def _build_items(inputs: List[InvoiceItemInput]) -> List[InvoiceItem]:
    return [
        InvoiceItem(id=i.id or new_id(), name=i.name, quantity=i.quantity, price=i.price)
        for i in inputs
    ]


class InvoiceService:
    """
    Servicio para gestión de facturas.

    Responsabilidades:
    - Emitir facturas con número único
    - Calcular totales con impuesto
    - Actualizar datos y estado
    - Facturar un pedido existente
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        client_service: ClientService,
        order_service: Optional[OrderService] = None,
        audit_service: AuditService = None,
        settings: Settings = DEFAULT_SETTINGS,
        clock: Callable = default_clock,
        rng=None
    ):
        """
        Args:
            invoice_repo: Repositorio de facturas
            client_service: Servicio de clientes (verificación de referencias)
            order_service: Servicio de pedidos (para create_from_order)
            audit_service: Servicio de auditoría (opcional)
            settings: Parámetros de negocio
            clock: Fuente de la hora actual
            rng: Generador aleatorio para los números de factura
        """
        self.invoice_repo = invoice_repo
        self.client_service = client_service
        self.order_service = order_service
        self.audit_service = audit_service
        self.settings = settings
        self._clock = clock
        self._rng = rng

    def _check_client(self, client_id: str) -> None:
        if self.settings.enforce_references and not self.client_service.client_exists(client_id):
            raise InvalidReferenceError('Cliente', client_id)

    def _totals_for(self, items: List[InvoiceItem]) -> Totals:
        return compute_totals(((i.quantity, i.price) for i in items), self.settings.tax_rate)

    # =========================================================================
    # EMISIÓN Y MODIFICACIÓN
    # =========================================================================

    def add_invoice(self, data: Union[InvoiceCreate, Dict[str, Any]]) -> Invoice:
        """
        Emite una factura.

        Args:
            data: client_id e items obligatorios; date, subtotal, tax,
                  total y status opcionales

        Returns:
            Factura creada con id, número y created_at

        Raises:
            ValidationError: Item sin nombre, cantidad o precio no positivos
            InvalidReferenceError: Si el cliente no existe
            CollisionError: Si no se pudo generar un número libre
        """
        command = parse_command(InvoiceCreate, data)
        self._check_client(command.client_id)

        now = self._clock()
        items = _build_items(command.items)
        computed = self._totals_for(items)
        invoice_number = generate_unique_code(
            self.invoice_repo.number_exists,
            self.settings.code_max_attempts,
            now=now,
            rng=self._rng
        )
        invoice = Invoice(
            id=self.invoice_repo.next_id(),
            invoice_number=invoice_number,
            client_id=command.client_id,
            date=command.date or now,
            items=items,
            subtotal=computed.subtotal if command.subtotal is None else command.subtotal,
            tax=computed.tax if command.tax is None else command.tax,
            total=computed.total if command.total is None else command.total,
            status=command.status,
            created_at=now,
        )
        self.invoice_repo.add(invoice.id, invoice)

        logger.debug("Factura %s (%s) emitida", invoice_number, invoice.id)
        if self.audit_service:
            self.audit_service.log_invoice_created(invoice_number, invoice.client_id, invoice.total)
        return invoice

    def update_invoice(
        self,
        invoice_id: str,
        changes: Union[InvoiceUpdate, Dict[str, Any]]
    ) -> Invoice:
        """
        Aplica los campos enviados a una factura.

        Raises:
            ValidationError: Si un campo es inválido
            NotFoundError: Si la factura no existe
            InvalidReferenceError: Si se cambia a un cliente inexistente
        """
        command = parse_command(InvoiceUpdate, changes)
        invoice = self.get_invoice(invoice_id)
        fields = command.changes()
        if 'client_id' in fields:
            self._check_client(fields['client_id'])

        if command.items is not None:
            fields['items'] = _build_items(command.items)
            computed = self._totals_for(fields['items'])
            fields.setdefault('subtotal', computed.subtotal)
            fields.setdefault('tax', computed.tax)
            fields.setdefault('total', computed.total)

        updated = replace(invoice, **fields)
        self.invoice_repo.update(invoice_id, updated)

        if self.audit_service:
            self.audit_service.log_invoice_updated(
                invoice.invoice_number,
                sorted(command.changes()),
                invoice.status.value,
                updated.status.value
            )
        return updated

    def update_invoice_status(self, invoice_id: str, status: Union[InvoiceStatus, str]) -> Invoice:
        """
        Raises:
            ValidationError: Si el estado no es válido
            NotFoundError: Si la factura no existe
        """
        return self.update_invoice(invoice_id, {'status': status})

    def create_from_order(self, order_id: str) -> Invoice:
        """
        Factura un pedido con los precios actuales del catálogo.

        Productos que ya no existen se omiten.

        Raises:
            NotFoundError: Si el pedido no existe
            ValidationError: Si ninguna línea del pedido tiene precio
        """
        if self.order_service is None:
            raise RuntimeError('InvoiceService sin order_service configurado')
        order = self.order_service.get_order(order_id)
        lines = [line for line in self.order_service.order_lines(order) if line['price'] > 0]
        if not lines:
            raise ValidationError(
                f"El pedido {order_id} no tiene líneas facturables",
                {'order_id': order_id}
            )
        return self.add_invoice({
            'client_id': order.client_id,
            'items': [
                {'id': line['id'], 'name': line['name'], 'quantity': line['quantity'], 'price': line['price']}
                for line in lines
            ],
        })

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_invoice(self, invoice_id: str) -> Invoice:
        """
        Raises:
            NotFoundError: Si la factura no existe
        """
        invoice = self.invoice_repo.get_by_id(invoice_id)
        if invoice is None:
            raise NotFoundError('Factura', invoice_id)
        return invoice

    def get_by_number(self, invoice_number: str) -> Invoice:
        invoice = self.invoice_repo.get_by_number(invoice_number)
        if invoice is None:
            raise NotFoundError('Factura', invoice_number)
        return invoice

    def list_invoices(self, status: Optional[Union[InvoiceStatus, str]] = None) -> List[Invoice]:
        """
        Lista facturas, opcionalmente filtradas por estado ('all' = todas).

        Raises:
            ValidationError: Si el estado no es válido
        """
        invoices = self.invoice_repo.get_all()
        if status is None or status == STATUS_ALL:
            return invoices
        try:
            status = InvoiceStatus(status)
        except ValueError:
            raise ValidationError(f"Estado de factura inválido: {status}", {'status': status}) from None
        return [i for i in invoices if i.status == status]
