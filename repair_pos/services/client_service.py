# ==============================================================================
# SERVICIO DE CLIENTES
# ==============================================================================
# Alta, modificación y búsqueda de clientes. No hay baja.
# ==============================================================================

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Union

from repair_pos.config import DEFAULT_SETTINGS, Settings, default_clock
from repair_pos.exceptions import NotFoundError
from repair_pos.models.commands import ClientCreate, ClientUpdate, parse_command
from repair_pos.models.entities import Client
from repair_pos.repositories.client_repository import ClientRepository
from repair_pos.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class ClientService:
    """
    Servicio para gestión de clientes.

    Responsabilidades:
    - Registrar clientes (id y fecha de alta los asigna el servicio)
    - Actualizar datos de contacto
    - Búsqueda por nombre, email o teléfono
    """

    def __init__(
        self,
        client_repo: ClientRepository,
        audit_service: AuditService = None,
        settings: Settings = DEFAULT_SETTINGS,
        clock: Callable = default_clock
    ):
        """
        Args:
            client_repo: Repositorio de clientes
            audit_service: Servicio de auditoría (opcional)
            settings: Parámetros de negocio
            clock: Fuente de la hora actual
        """
        self.client_repo = client_repo
        self.audit_service = audit_service
        self.settings = settings
        self._clock = clock

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def list_clients(self) -> List[Client]:
        """Todos los clientes en orden de alta."""
        return self.client_repo.get_all()

    def find_client(self, client_id: str) -> Optional[Client]:
        """Cliente por id, o None."""
        return self.client_repo.get_by_id(client_id)

    def get_client(self, client_id: str) -> Client:
        """
        Cliente por id.

        Raises:
            NotFoundError: Si no existe
        """
        client = self.client_repo.get_by_id(client_id)
        if client is None:
            raise NotFoundError('Cliente', client_id)
        return client

    def client_exists(self, client_id: str) -> bool:
        return self.client_repo.exists(client_id)

    def search_clients(self, query: str) -> List[Client]:
        """Clientes cuyo nombre, email o teléfono contienen `query`."""
        return self.client_repo.search(query)

    def recent_clients(self, limit: Optional[int] = None) -> List[Client]:
        """Últimos clientes registrados, el más reciente primero."""
        limit = self.settings.recent_items_limit if limit is None else limit
        clients = sorted(self.list_clients(), key=lambda c: c.created_at, reverse=True)
        return clients[:limit]

    # =========================================================================
    # ALTAS Y MODIFICACIONES
    # =========================================================================

    def add_client(self, data: Union[ClientCreate, Dict[str, Any]]) -> Client:
        """
        Registra un cliente.

        Args:
            data: name y phone obligatorios; email y address opcionales

        Returns:
            Cliente creado con id y created_at

        Raises:
            ValidationError: Si falta nombre o teléfono
        """
        command = parse_command(ClientCreate, data)
        client = Client(
            id=self.client_repo.next_id(),
            created_at=self._clock(),
            **command.model_dump()
        )
        self.client_repo.add(client.id, client)
        logger.debug("Cliente %s registrado", client.id)
        if self.audit_service:
            self.audit_service.log_client_created(client.id, client.name)
        return client

    def update_client(
        self,
        client_id: str,
        changes: Union[ClientUpdate, Dict[str, Any]]
    ) -> Client:
        """
        Actualiza los campos enviados de un cliente.

        id y created_at no se pueden modificar.

        Raises:
            ValidationError: Si un campo enviado es inválido
            NotFoundError: Si el cliente no existe
        """
        command = parse_command(ClientUpdate, changes)
        client = self.get_client(client_id)
        fields = command.changes()
        updated = replace(client, **fields)
        self.client_repo.update(client_id, updated)
        if self.audit_service:
            self.audit_service.log_client_updated(client_id, sorted(fields))
        return updated
