# ==============================================================================
# SERVICIO DE ESTADÍSTICAS DEL PANEL
# ==============================================================================
# Resumen que muestra el panel principal del taller.
#
# REGLA: los ingresos cuentan SOLO pedidos en estado completed.
# ==============================================================================

from typing import Any, Dict, Optional

from repair_pos.config import DEFAULT_SETTINGS, Settings
from repair_pos.models.entities import OrderStatus, TicketStatus
from repair_pos.money import money_str
from repair_pos.services.client_service import ClientService
from repair_pos.services.inventory_service import InventoryService
from repair_pos.services.order_service import OrderService
from repair_pos.services.ticket_service import TicketService


class StatsService:
    """
    Servicio de estadísticas del panel.

    Responsabilidades:
    - Conteos de tickets por estado
    - Alertas de stock bajo
    - Pedidos por estado e ingresos de pedidos completados
    - Listas de tickets y clientes recientes
    """

    def __init__(
        self,
        ticket_service: TicketService,
        client_service: ClientService,
        inventory_service: InventoryService,
        order_service: OrderService,
        settings: Settings = DEFAULT_SETTINGS
    ):
        self.ticket_service = ticket_service
        self.client_service = client_service
        self.inventory_service = inventory_service
        self.order_service = order_service
        self.settings = settings

    def dashboard_summary(self, recent_limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Calcula el resumen del panel.

        Args:
            recent_limit: Tamaño de las listas recientes
                          (por defecto settings.recent_items_limit)

        Returns:
            Dict serializable con contadores, ingresos y listas recientes
        """
        limit = self.settings.recent_items_limit if recent_limit is None else recent_limit
        ticket_counts = self.ticket_service.count_by_status()
        clients = self.client_service.list_clients()
        names = {c.id: c.name for c in clients}
        low_stock = self.inventory_service.low_stock_products()

        recent_tickets = []
        for ticket in self.ticket_service.recent_tickets(limit):
            entry = ticket.to_dict()
            entry['client_name'] = names.get(ticket.client_id, '')
            recent_tickets.append(entry)

        return {
            'tickets': {
                'pending': ticket_counts[TicketStatus.PENDING.value],
                'in_progress': ticket_counts[TicketStatus.IN_PROGRESS.value],
                'completed': ticket_counts[TicketStatus.COMPLETED.value],
                'total': sum(ticket_counts.values()),
            },
            'total_clients': len(clients),
            'low_stock_count': len(low_stock),
            'low_stock': [
                {'id': p.id, 'name': p.name, 'stock': p.stock} for p in low_stock
            ],
            'orders': self.order_service.count_by_status(),
            'revenue': money_str(self.order_service.revenue(OrderStatus.COMPLETED)),
            'recent_tickets': recent_tickets,
            'recent_clients': [
                c.to_dict() for c in self.client_service.recent_clients(limit)
            ],
        }
