# ==============================================================================
# SERVICIO DE TICKETS DE REPARACIÓN
# ==============================================================================
# Ciclo de vida de los tickets: alta con número de seguimiento, cambios de
# estado y consultas para el panel y el formulario.
#
# ESTADOS: pending, in-progress, completed
# No hay grafo de transiciones: cualquier estado válido se puede asignar.
# ==============================================================================

import logging
from collections import Counter
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Union

from repair_pos.config import DEFAULT_SETTINGS, Settings, default_clock
from repair_pos.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from repair_pos.models.commands import TicketCreate, TicketUpdate, parse_command
from repair_pos.models.entities import Ticket, TicketStatus
from repair_pos.repositories.ticket_repository import TicketRepository
from repair_pos.services.audit_service import AuditService
from repair_pos.services.client_service import ClientService
from repair_pos.services.identifier import generate_unique_code

logger = logging.getLogger(__name__)

STATUS_ALL = 'all'


class TicketService:
    """
    Servicio para gestión de tickets.

    Responsabilidades:
    - Crear tickets (id, número de seguimiento y fechas los asigna el servicio)
    - Actualizar tickets (updated_at se renueva siempre)
    - Tareas más usadas para preseleccionar en el formulario
    - Conteos por estado para el panel
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        client_service: ClientService,
        audit_service: AuditService = None,
        settings: Settings = DEFAULT_SETTINGS,
        clock: Callable = default_clock,
        rng=None
    ):
        """
        Args:
            ticket_repo: Repositorio de tickets
            client_service: Servicio de clientes (verificación de referencias)
            audit_service: Servicio de auditoría (opcional)
            settings: Parámetros de negocio
            clock: Fuente de la hora actual
            rng: Generador aleatorio para los números de ticket
        """
        self.ticket_repo = ticket_repo
        self.client_service = client_service
        self.audit_service = audit_service
        self.settings = settings
        self._clock = clock
        self._rng = rng

    def _check_client(self, client_id: str) -> None:
        if self.settings.enforce_references and not self.client_service.client_exists(client_id):
            raise InvalidReferenceError('Cliente', client_id)

    # =========================================================================
    # CREACIÓN Y MODIFICACIÓN
    # =========================================================================

    def create_ticket(self, data: Union[TicketCreate, Dict[str, Any]]) -> str:
        """
        Crea un ticket de reparación.

        Args:
            data: client_id, device_type, brand, model obligatorios;
                  tasks, issue, status, cost, technician_id, passcode opcionales

        Returns:
            Número de seguimiento del ticket (ej: 'oct1234')

        Raises:
            ValidationError: Si falta un campo obligatorio o el costo es negativo
            InvalidReferenceError: Si el cliente no existe
            CollisionError: Si no se pudo generar un número libre
        """
        command = parse_command(TicketCreate, data)
        self._check_client(command.client_id)

        now = self._clock()
        ticket_number = generate_unique_code(
            self.ticket_repo.number_exists,
            self.settings.code_max_attempts,
            now=now,
            rng=self._rng
        )
        ticket = Ticket(
            id=self.ticket_repo.next_id(),
            ticket_number=ticket_number,
            created_at=now,
            updated_at=now,
            **command.model_dump()
        )
        self.ticket_repo.add(ticket.id, ticket)

        logger.debug("Ticket %s (%s) creado", ticket_number, ticket.id)
        if self.audit_service:
            client = self.client_service.find_client(ticket.client_id)
            self.audit_service.log_ticket_created(
                ticket_number,
                client.name if client else ticket.client_id,
                f"{ticket.brand} {ticket.model}"
            )
        return ticket_number

    def update_ticket(
        self,
        ticket_id: str,
        changes: Union[TicketUpdate, Dict[str, Any]]
    ) -> Ticket:
        """
        Aplica los campos enviados y renueva updated_at.

        updated_at nunca retrocede aunque el reloj lo haga.

        Raises:
            ValidationError: Si un campo es inválido
            NotFoundError: Si el ticket no existe
            InvalidReferenceError: Si se cambia a un cliente inexistente
        """
        command = parse_command(TicketUpdate, changes)
        ticket = self.get_ticket(ticket_id)
        fields = command.changes()
        if 'client_id' in fields:
            self._check_client(fields['client_id'])

        now = self._clock()
        if ticket.updated_at and now < ticket.updated_at:
            now = ticket.updated_at
        updated = replace(ticket, updated_at=now, **fields)
        self.ticket_repo.update(ticket_id, updated)

        if self.audit_service:
            self.audit_service.log_ticket_updated(
                ticket.ticket_number,
                sorted(fields),
                ticket.status.value,
                updated.status.value
            )
        return updated

    def set_status(self, ticket_id: str, status: Union[TicketStatus, str]) -> Ticket:
        """Asigna un estado (cualquiera de los válidos)."""
        return self.update_ticket(ticket_id, {'status': status})

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_ticket(self, ticket_id: str) -> Ticket:
        """
        Raises:
            NotFoundError: Si el ticket no existe
        """
        ticket = self.ticket_repo.get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError('Ticket', ticket_id)
        return ticket

    def get_by_number(self, ticket_number: str) -> Ticket:
        """
        Raises:
            NotFoundError: Si no hay ticket con ese número
        """
        ticket = self.ticket_repo.get_by_number(ticket_number)
        if ticket is None:
            raise NotFoundError('Ticket', ticket_number)
        return ticket

    def list_tickets(self, status: Optional[Union[TicketStatus, str]] = None) -> List[Ticket]:
        """
        Lista tickets, opcionalmente filtrados por estado.

        Args:
            status: None o 'all' para todos; si no, un estado válido

        Raises:
            ValidationError: Si el estado no es válido
        """
        tickets = self.ticket_repo.get_all()
        if status is None or status == STATUS_ALL:
            return tickets
        try:
            status = TicketStatus(status)
        except ValueError:
            raise ValidationError(f"Estado de ticket inválido: {status}", {'status': status}) from None
        return [t for t in tickets if t.status == status]

    def tickets_for_client(self, client_id: str) -> List[Ticket]:
        return self.ticket_repo.find_all_by('client_id', client_id)

    def count_by_status(self) -> Dict[str, int]:
        """Cantidad de tickets por estado (todos los estados presentes)."""
        counts = {status.value: 0 for status in TicketStatus}
        for ticket in self.ticket_repo.get_all():
            counts[ticket.status.value] += 1
        return counts

    def recent_tickets(self, limit: Optional[int] = None) -> List[Ticket]:
        """Últimos tickets creados, el más reciente primero."""
        limit = self.settings.recent_items_limit if limit is None else limit
        tickets = sorted(self.ticket_repo.get_all(), key=lambda t: t.created_at, reverse=True)
        return tickets[:limit]

    def popular_tasks(self, limit: Optional[int] = None) -> List[str]:
        """
        Tareas más frecuentes en todos los tickets.

        Empates: se conserva el orden en que cada tarea apareció por primera vez.

        Args:
            limit: Cantidad máxima (por defecto settings.popular_tasks_limit)

        Returns:
            Nombres de tareas ordenados por frecuencia descendente
        """
        limit = self.settings.popular_tasks_limit if limit is None else limit
        counts = Counter()
        for ticket in self.ticket_repo.get_all():
            counts.update(ticket.tasks)
        # sorted() es estable y Counter conserva el orden de inserción
        ranked = sorted(counts.items(), key=lambda item: -item[1])
        return [task for task, _ in ranked[:limit]]
