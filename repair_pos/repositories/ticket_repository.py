# ==============================================================================
# REPOSITORIO DE TICKETS
# ==============================================================================

from typing import Optional

from repair_pos.models.entities import Ticket
from repair_pos.repositories.base import DictRepository


class TicketRepository(DictRepository[Ticket]):
    """Repositorio de tickets de reparación indexado por id."""

    def get_by_number(self, ticket_number: str) -> Optional[Ticket]:
        """Obtiene un ticket por su número de seguimiento."""
        return self.find_by('ticket_number', ticket_number)

    def number_exists(self, ticket_number: str) -> bool:
        """Verifica si un número de ticket ya está en uso."""
        return self.get_by_number(ticket_number) is not None
