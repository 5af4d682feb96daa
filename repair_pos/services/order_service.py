# ==============================================================================
# SERVICIO DE PEDIDOS
# ==============================================================================
# Centraliza la lógica de los pedidos de punto de venta.
#
# REGLAS:
# - create_order copia el carrito (snapshot) y lo vacía
# - El total lo calcula quien llama; con strict_order_totals se recalcula
#   desde el catálogo y una diferencia rechaza el pedido
# - Los estados se sobrescriben sin grafo de transiciones
# ==============================================================================

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from repair_pos.config import DEFAULT_SETTINGS, Settings, default_clock
from repair_pos.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from repair_pos.models.entities import Order, OrderStatus
from repair_pos.money import ZERO, money_str, to_money
from repair_pos.repositories.order_repository import OrderRepository
from repair_pos.services.audit_service import AuditService
from repair_pos.services.cart_service import UNKNOWN_PRODUCT, CartService
from repair_pos.services.client_service import ClientService
from repair_pos.services.inventory_service import InventoryService
from repair_pos.services.pricing import Totals, compute_totals, validate_line_items

logger = logging.getLogger(__name__)

STATUS_ALL = 'all'
SORT_FIELDS = frozenset(['created_at', 'total', 'client', 'status', 'id'])


def parse_order_status(status: Union[OrderStatus, str]) -> OrderStatus:
    """
    Raises:
        ValidationError: Si el estado no es válido
    """
    try:
        return OrderStatus(status)
    except ValueError:
        raise ValidationError(f"Estado de pedido inválido: {status}", {'status': status}) from None


class OrderService:
    """
    Servicio para gestión de pedidos.

    Responsabilidades:
    - Crear pedidos desde el carrito
    - Cambiar estados y eliminar pedidos
    - Listado con búsqueda, filtro y orden
    - Cálculo de totales de formularios de pedido
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_service: CartService,
        client_service: ClientService,
        inventory_service: InventoryService,
        audit_service: AuditService = None,
        settings: Settings = DEFAULT_SETTINGS,
        clock: Callable = default_clock
    ):
        """
        Args:
            order_repo: Repositorio de pedidos
            cart_service: Servicio de carrito
            client_service: Servicio de clientes
            inventory_service: Servicio de inventario (precios)
            audit_service: Servicio de auditoría (opcional)
            settings: Parámetros de negocio
            clock: Fuente de la hora actual
        """
        self.order_repo = order_repo
        self.cart_service = cart_service
        self.client_service = client_service
        self.inventory_service = inventory_service
        self.audit_service = audit_service
        self.settings = settings
        self._clock = clock

    # =========================================================================
    # CREACIÓN DE PEDIDOS
    # =========================================================================

    def create_order(self, client_id: str, total: Union[Decimal, str, int, float]) -> Order:
        """
        Crea un pedido con el contenido actual del carrito.

        Args:
            client_id: Cliente del pedido
            total: Total con impuestos calculado por quien llama

        Returns:
            Pedido creado (estado pending)

        Raises:
            ValidationError: Carrito vacío, total inválido o (modo estricto)
                             total distinto al recalculado
            InvalidReferenceError: Si el cliente no existe
        """
        items = self.cart_service.get_items()
        if not items:
            raise ValidationError('El carrito está vacío')
        if not (client_id or '').strip():
            raise ValidationError('Seleccione un cliente', {'field': 'client_id'})
        if self.settings.enforce_references and not self.client_service.client_exists(client_id):
            raise InvalidReferenceError('Cliente', client_id)
        try:
            total = to_money(total)
        except ValueError:
            raise ValidationError(f"Total inválido: {total!r}", {'field': 'total'}) from None
        if total < 0:
            raise ValidationError('El total no puede ser negativo', {'field': 'total'})

        if self.settings.strict_order_totals:
            expected = self.cart_service.compute_totals().total
            if expected != total:
                raise ValidationError(
                    f"El total {money_str(total)} no coincide con el calculado {money_str(expected)}",
                    {'expected': money_str(expected), 'received': money_str(total)}
                )

        order = Order(
            id=self.order_repo.next_id(),
            client_id=client_id,
            items=items,
            total=total,
            status=OrderStatus.PENDING,
            created_at=self._clock(),
        )
        self.order_repo.add(order.id, order)
        self.cart_service.clear_cart()

        logger.debug("Pedido %s creado con %d items", order.id, len(items))
        if self.audit_service:
            self.audit_service.log_order_created(order.id, client_id, total, order.item_count)
        return order

    # =========================================================================
    # ESTADOS Y BAJAS
    # =========================================================================

    def update_order_status(self, order_id: str, status: Union[OrderStatus, str]) -> Order:
        """
        Sobrescribe el estado de un pedido.

        Raises:
            ValidationError: Si el estado no es válido
            NotFoundError: Si el pedido no existe
        """
        new_status = parse_order_status(status)
        order = self.get_order(order_id)
        old_status = order.status
        order.status = new_status
        self.order_repo.update(order_id, order)
        if self.audit_service:
            self.audit_service.log_order_status_change(order_id, old_status.value, new_status.value)
        return order

    def remove_order(self, order_id: str) -> Order:
        """
        Elimina un pedido.

        Returns:
            Pedido eliminado

        Raises:
            NotFoundError: Si el pedido no existe
        """
        removed = self.order_repo.delete(order_id)
        if removed is None:
            raise NotFoundError('Pedido', order_id)
        if self.audit_service:
            self.audit_service.log_order_removed(order_id)
        return removed

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_order(self, order_id: str) -> Order:
        """
        Raises:
            NotFoundError: Si el pedido no existe
        """
        order = self.order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError('Pedido', order_id)
        return order

    def list_orders(self) -> List[Order]:
        return self.order_repo.get_all()

    def query_orders(
        self,
        search: str = '',
        status: Union[OrderStatus, str] = STATUS_ALL,
        sort_field: str = 'created_at',
        direction: str = 'desc'
    ) -> List[Order]:
        """
        Listado de pedidos filtrado y ordenado.

        Args:
            search: Texto en el nombre del cliente o en el id del pedido
            status: 'all' o un estado
            sort_field: created_at, total, client, status o id
            direction: 'asc' o 'desc'

        Raises:
            ValidationError: Si el estado, el campo o la dirección no son válidos
        """
        if sort_field not in SORT_FIELDS:
            raise ValidationError(f"Campo de orden inválido: {sort_field}", {'sort_field': sort_field})
        if direction not in ('asc', 'desc'):
            raise ValidationError(f"Dirección inválida: {direction}", {'direction': direction})
        status_filter = None if status == STATUS_ALL else parse_order_status(status)

        names = {c.id: c.name for c in self.client_service.list_clients()}
        q = (search or '').strip().lower()

        orders = []
        for order in self.order_repo.get_all():
            if status_filter is not None and order.status != status_filter:
                continue
            if q and q not in names.get(order.client_id, '').lower() and q not in order.id.lower():
                continue
            orders.append(order)

        sort_keys = {
            'created_at': lambda o: o.created_at,
            'total': lambda o: o.total,
            'client': lambda o: names.get(o.client_id, '').lower(),
            'status': lambda o: o.status.value,
            'id': lambda o: o.id,
        }
        return sorted(orders, key=sort_keys[sort_field], reverse=(direction == 'desc'))

    def count_by_status(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in OrderStatus}
        for order in self.order_repo.get_all():
            counts[order.status.value] += 1
        return counts

    def revenue(self, status: Optional[OrderStatus] = OrderStatus.COMPLETED) -> Decimal:
        """Suma de totales de los pedidos en `status` (None = todos)."""
        return sum(
            (o.total for o in self.order_repo.get_all() if status is None or o.status == status),
            ZERO
        )

    # =========================================================================
    # LÍNEAS Y TOTALES
    # =========================================================================

    def order_lines(self, order: Order) -> List[Dict[str, Any]]:
        """
        Resuelve nombre, SKU y precio de cada item con el catálogo actual.

        Productos inexistentes se muestran como 'Unknown Product' a precio 0.
        """
        lines = []
        for item in order.items:
            product = self.inventory_service.find_product(item.product_id)
            lines.append({
                'id': item.product_id,
                'name': product.name if product else UNKNOWN_PRODUCT,
                'sku': product.sku if product else '',
                'description': product.description if product else '',
                'quantity': item.quantity,
                'price': product.price if product else ZERO,
            })
        return lines

    def order_totals(self, order: Order) -> Totals:
        """Subtotal, impuesto y total recalculados con los precios actuales."""
        return compute_totals(
            ((line['quantity'], line['price']) for line in self.order_lines(order)),
            self.settings.tax_rate
        )

    def quote(self, lines: Iterable[Mapping[str, Any]]) -> Totals:
        """
        Totales de un formulario de pedido.

        Args:
            lines: Diccionarios con name, quantity, unit_price

        Raises:
            ValidationError: Línea sin nombre, cantidad o precio no positivos
        """
        items = validate_line_items(lines)
        return compute_totals(
            ((item.quantity, item.unit_price) for item in items),
            self.settings.tax_rate
        )
