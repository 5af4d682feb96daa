# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
# Los servicios de carrito, catálogo y auditoría dependen de estos
# protocolos, no de las clases concretas.
# Un almacenamiento distinto (base de datos, servicio remoto) solo necesita
# implementar el mismo contrato y registrarse en app_container.py.
# ==============================================================================

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from repair_pos.models.entities import AuditLog, AuditType, CartItem, CatalogSettings


@runtime_checkable
class ICartRepository(Protocol):
    """Contrato del carrito de trabajo."""

    def get_all(self) -> List[CartItem]:
        ...

    def put(self, item: CartItem) -> None:
        ...

    def remove_product(self, product_id: str) -> bool:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class ICatalogRepository(Protocol):
    """Contrato del catálogo de dispositivos."""

    def load(self) -> CatalogSettings:
        ...

    def save(self, settings: CatalogSettings) -> None:
        ...


@runtime_checkable
class IAuditRepository(Protocol):
    """Contrato del registro de auditoría."""

    def log(
        self,
        log_type: AuditType,
        message: str,
        timestamp: datetime,
        related_id: str,
        details: Dict[str, Any]
    ) -> AuditLog:
        ...

    def load(
        self,
        log_type: Optional[AuditType] = None,
        related_id: Optional[str] = None
    ) -> List[AuditLog]:
        ...
