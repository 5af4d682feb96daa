# ==============================================================================
# REPOSITORIO DE CLIENTES
# ==============================================================================

from typing import List

from repair_pos.models.entities import Client
from repair_pos.repositories.base import DictRepository


class ClientRepository(DictRepository[Client]):
    """Repositorio de clientes indexado por id."""

    def search(self, query: str) -> List[Client]:
        """
        Busca clientes por nombre, email o teléfono.

        Args:
            query: Texto a buscar (sin distinguir mayúsculas)

        Returns:
            Clientes que coinciden, en orden de alta
        """
        q = (query or '').strip().lower()
        clients = self.get_all()
        if not q:
            return clients
        return [
            c for c in clients
            if q in c.name.lower() or q in c.email.lower() or q in c.phone.lower()
        ]
