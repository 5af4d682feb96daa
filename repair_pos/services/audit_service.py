# ==============================================================================
# SERVICIO DE AUDITORÍA
# ==============================================================================
# Centraliza el registro de actividad del taller.
# Formatea mensajes humanizados y categoriza eventos.
# ==============================================================================

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from repair_pos.config import default_clock
from repair_pos.models.entities import AuditLog, AuditType
from repair_pos.money import money_str
from repair_pos.repositories.interfaces import IAuditRepository

logger = logging.getLogger(__name__)


class AuditService:
    """
    Servicio para registro y consulta de auditoría.

    Centraliza:
    - Registro de eventos con mensajes humanizados
    - Categorización (CLIENTE, TICKET, CATALOGO, PRODUCTO, STOCK, PEDIDO, FACTURA)
    - Búsqueda y filtrado de logs

    Cada evento también se emite por el logger del módulo (nivel INFO).
    """

    def __init__(self, audit_repo: IAuditRepository, clock: Callable = default_clock):
        """
        Args:
            audit_repo: Repositorio de auditoría
            clock: Fuente de la hora actual
        """
        self.audit_repo = audit_repo
        self._clock = clock

    # =========================================================================
    # REGISTRO DE EVENTOS
    # =========================================================================

    def log(
        self,
        log_type: AuditType,
        message: str,
        related_id: str = '',
        details: Optional[Dict[str, Any]] = None
    ) -> AuditLog:
        """
        Registra un evento de auditoría genérico.

        Args:
            log_type: Tipo de evento
            message: Mensaje descriptivo humanizado
            related_id: ID relacionado
            details: Detalles adicionales
        """
        logger.info("[%s] %s", log_type.value, message)
        return self.audit_repo.log(log_type, message, self._clock(), related_id, details or {})

    def log_client_created(self, client_id: str, name: str) -> None:
        self.log(AuditType.CLIENTE, f"Cliente {name} registrado", client_id, {'name': name})

    def log_client_updated(self, client_id: str, fields: List[str]) -> None:
        self.log(
            AuditType.CLIENTE,
            f"Cliente {client_id} actualizado ({', '.join(fields) or 'sin cambios'})",
            client_id,
            {'fields': fields}
        )

    def log_ticket_created(self, ticket_number: str, client_name: str, device: str) -> None:
        """
        Registra la creación de un ticket.

        Args:
            ticket_number: Número de seguimiento
            client_name: Nombre del cliente (o su id si no se resolvió)
            device: Descripción del equipo (marca y modelo)
        """
        message = f"Ticket {ticket_number} creado para {client_name} - {device}"
        self.log(AuditType.TICKET, message, ticket_number, {'device': device})

    def log_ticket_updated(
        self,
        ticket_number: str,
        fields: List[str],
        old_status: Optional[str] = None,
        new_status: Optional[str] = None
    ) -> None:
        if old_status and new_status and old_status != new_status:
            message = f"Ticket {ticket_number}: {old_status} → {new_status}"
        else:
            message = f"Ticket {ticket_number} actualizado ({', '.join(fields) or 'sin cambios'})"
        self.log(
            AuditType.TICKET,
            message,
            ticket_number,
            {'fields': fields, 'from': old_status, 'to': new_status}
        )

    def log_catalog_change(self, action: str, kind: str, value: str, new_value: str = '') -> None:
        """
        Registra un cambio en el catálogo de dispositivos.

        Args:
            action: 'add', 'remove' o 'rename'
            kind: 'device_type', 'brand', 'model' o 'task'
            value: Valor afectado
            new_value: Nuevo valor (solo para rename)
        """
        if action == 'rename':
            message = f"Catálogo: {kind} '{value}' renombrado a '{new_value}'"
        elif action == 'remove':
            message = f"Catálogo: {kind} '{value}' eliminado"
        else:
            message = f"Catálogo: {kind} '{value}' agregado"
        self.log(
            AuditType.CATALOGO,
            message,
            value,
            {'action': action, 'kind': kind, 'new_value': new_value}
        )

    def log_product_created(self, pid: str, name: str, sku: str) -> None:
        self.log(AuditType.PRODUCTO, f"Producto {name} ({sku or 'sin SKU'}) creado", pid, {'sku': sku})

    def log_product_updated(self, pid: str, fields: List[str]) -> None:
        self.log(
            AuditType.PRODUCTO,
            f"Producto {pid} actualizado ({', '.join(fields) or 'sin cambios'})",
            pid,
            {'fields': fields}
        )

    def log_stock_adjusted(self, pid: str, name: str, delta: int, old_stock: int, new_stock: int) -> None:
        """
        Registra un ajuste de stock.

        Args:
            pid: ID del producto
            name: Nombre del producto
            delta: Cantidad sumada (negativa en ventas)
            old_stock: Stock anterior
            new_stock: Stock resultante
        """
        sign = '+' if delta >= 0 else ''
        message = f"Stock de {name}: {old_stock} → {new_stock} ({sign}{delta})"
        if new_stock < 0:
            message += " - STOCK NEGATIVO"
        self.log(
            AuditType.STOCK,
            message,
            pid,
            {'delta': delta, 'from': old_stock, 'to': new_stock}
        )

    def log_order_created(self, order_id: str, client_id: str, total: Decimal, items_count: int) -> None:
        message = f"Pedido {order_id} creado - Total: {money_str(total)} - {items_count} items"
        self.log(
            AuditType.PEDIDO,
            message,
            order_id,
            {'client_id': client_id, 'total': money_str(total), 'items_count': items_count}
        )

    def log_order_status_change(self, order_id: str, old_status: str, new_status: str) -> None:
        self.log(
            AuditType.PEDIDO,
            f"Pedido {order_id}: {old_status} → {new_status}",
            order_id,
            {'from': old_status, 'to': new_status}
        )

    def log_order_removed(self, order_id: str) -> None:
        self.log(AuditType.PEDIDO, f"Pedido {order_id} eliminado", order_id)

    def log_invoice_created(self, invoice_number: str, client_id: str, total: Decimal) -> None:
        self.log(
            AuditType.FACTURA,
            f"Factura {invoice_number} emitida - Total: {money_str(total)}",
            invoice_number,
            {'client_id': client_id, 'total': money_str(total)}
        )

    def log_invoice_updated(
        self,
        invoice_number: str,
        fields: List[str],
        old_status: Optional[str] = None,
        new_status: Optional[str] = None
    ) -> None:
        if old_status and new_status and old_status != new_status:
            message = f"Factura {invoice_number}: {old_status} → {new_status}"
        else:
            message = f"Factura {invoice_number} actualizada ({', '.join(fields) or 'sin cambios'})"
        self.log(
            AuditType.FACTURA,
            message,
            invoice_number,
            {'fields': fields, 'from': old_status, 'to': new_status}
        )

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_logs(
        self,
        log_type: Optional[AuditType] = None,
        related_id: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[AuditLog]:
        """
        Obtiene los logs más recientes primero.

        Args:
            log_type: Filtrar por tipo
            related_id: Filtrar por ID relacionado
            limit: Máximo de registros

        Returns:
            Lista de AuditLog
        """
        logs = self.audit_repo.load(log_type, related_id)
        if limit is not None:
            logs = logs[:limit]
        return logs
