# ==============================================================================
# REPOSITORIO DE AUDITORÍA
# ==============================================================================
# La auditoría se almacena como lista, el registro más reciente primero.
# ==============================================================================

from datetime import datetime
from typing import Any, Dict, List, Optional

from repair_pos.config import AUDIT_MAX_ENTRIES
from repair_pos.models.entities import AuditLog, AuditType
from repair_pos.repositories.base import ListRepository


class AuditRepository(ListRepository[AuditLog]):
    """
    Repositorio del registro de auditoría.

    Ejemplo de entrada:
        AuditLog(type=AuditType.TICKET,
                 message="Ticket oct1234 creado para John Doe",
                 related_id="oct1234",
                 details={...})
    """

    def __init__(self, max_entries: int = AUDIT_MAX_ENTRIES):
        """
        Args:
            max_entries: Límite de registros; se descartan los más antiguos
        """
        super().__init__()
        self.max_entries = max_entries

    def log(
        self,
        log_type: AuditType,
        message: str,
        timestamp: datetime,
        related_id: str = '',
        details: Optional[Dict[str, Any]] = None
    ) -> AuditLog:
        """
        Registra un nuevo evento de auditoría.

        Args:
            log_type: Tipo de evento
            message: Mensaje descriptivo humanizado
            timestamp: Momento del evento
            related_id: ID relacionado (ticket_number, id de producto, etc.)
            details: Detalles adicionales
        """
        entry = AuditLog(
            type=log_type,
            message=message,
            timestamp=timestamp,
            related_id=related_id,
            details=details or {},
        )
        with self._lock:
            self.insert_first(entry)
            self.truncate(self.max_entries)
        return entry

    def load(
        self,
        log_type: Optional[AuditType] = None,
        related_id: Optional[str] = None
    ) -> List[AuditLog]:
        """
        Carga los registros, opcionalmente filtrados.

        Returns:
            Lista de logs (más recientes primero)
        """
        logs = self.get_all()
        if log_type is not None:
            logs = [entry for entry in logs if entry.type == log_type]
        if related_id is not None:
            logs = [entry for entry in logs if entry.related_id == related_id]
        return logs
