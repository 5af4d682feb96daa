# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto único para obtener repositorios y servicios ya conectados entre sí.
#   - Cada AppContainer es un estado aislado (no hay singleton)
#   - Repositorios y servicios se crean al primer acceso
#   - settings, clock y rng se comparten con todos los servicios
#
# Para cambiar el almacenamiento basta con otra clase que cumpla la
# interfaz del repositorio (repositories/interfaces.py); los servicios no
# cambian.
# ==============================================================================

import logging
import random
from typing import Callable, Optional

from repair_pos.config import (
    DEFAULT_BRANDS,
    DEFAULT_DEVICE_TYPES,
    DEFAULT_MODELS,
    DEFAULT_SETTINGS,
    DEFAULT_TASKS,
    Settings,
    default_clock,
)
from repair_pos.models.entities import CatalogSettings, DeviceModel

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de almacenamiento (en memoria)
# ═══════════════════════════════════════════════════════════════════════════════
from repair_pos.repositories import (
    AuditRepository,
    CartRepository,
    CatalogRepository,
    ClientRepository,
    InvoiceRepository,
    OrderRepository,
    ProductRepository,
    TicketRepository,
    new_id,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from repair_pos.services import (
    AuditService,
    CartService,
    CatalogService,
    ClientService,
    InventoryService,
    InvoiceService,
    OrderService,
    ReceiptService,
    StatsService,
    TicketService,
)

logger = logging.getLogger(__name__)


def default_catalog() -> CatalogSettings:
    """Vocabulario inicial del catálogo de dispositivos."""
    return CatalogSettings(
        device_types=list(DEFAULT_DEVICE_TYPES),
        brands=list(DEFAULT_BRANDS),
        models=[DeviceModel(id=new_id(), name=name, brand_id=brand) for name, brand in DEFAULT_MODELS],
        tasks=list(DEFAULT_TASKS),
    )


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Uso:
        container = AppContainer()
        number = container.ticket_service.create_ticket({...})
        container.cart_service.add_to_cart(pid, 2)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Callable] = None,
        rng: Optional[random.Random] = None,
        seed_catalog: bool = True
    ):
        """
        Inicializa el contenedor.

        Args:
            settings: Parámetros de negocio (por defecto DEFAULT_SETTINGS)
            clock: Fuente de la hora actual (inyectable en tests)
            rng: Generador aleatorio para códigos de ticket/factura
            seed_catalog: Cargar el vocabulario inicial del catálogo
        """
        self.settings = settings or DEFAULT_SETTINGS
        self.clock = clock or default_clock
        self.rng = rng
        self.seed_catalog = seed_catalog
        self.reset()

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def client_repo(self) -> ClientRepository:
        if self._client_repo is None:
            self._client_repo = ClientRepository()
        return self._client_repo

    @property
    def catalog_repo(self) -> CatalogRepository:
        """Repositorio del catálogo (con el vocabulario inicial si corresponde)."""
        if self._catalog_repo is None:
            self._catalog_repo = CatalogRepository()
            if self.seed_catalog:
                self._catalog_repo.save(default_catalog())
        return self._catalog_repo

    @property
    def ticket_repo(self) -> TicketRepository:
        if self._ticket_repo is None:
            self._ticket_repo = TicketRepository()
        return self._ticket_repo

    @property
    def product_repo(self) -> ProductRepository:
        if self._product_repo is None:
            self._product_repo = ProductRepository()
        return self._product_repo

    @property
    def order_repo(self) -> OrderRepository:
        if self._order_repo is None:
            self._order_repo = OrderRepository()
        return self._order_repo

    @property
    def cart_repo(self) -> CartRepository:
        if self._cart_repo is None:
            self._cart_repo = CartRepository()
        return self._cart_repo

    @property
    def invoice_repo(self) -> InvoiceRepository:
        if self._invoice_repo is None:
            self._invoice_repo = InvoiceRepository()
        return self._invoice_repo

    @property
    def audit_repo(self) -> AuditRepository:
        if self._audit_repo is None:
            self._audit_repo = AuditRepository(self.settings.audit_max_entries)
        return self._audit_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def audit_service(self) -> AuditService:
        if self._audit_service is None:
            self._audit_service = AuditService(self.audit_repo, clock=self.clock)
        return self._audit_service

    @property
    def catalog_service(self) -> CatalogService:
        if self._catalog_service is None:
            self._catalog_service = CatalogService(self.catalog_repo, self.audit_service)
        return self._catalog_service

    @property
    def client_service(self) -> ClientService:
        if self._client_service is None:
            self._client_service = ClientService(
                self.client_repo,
                self.audit_service,
                settings=self.settings,
                clock=self.clock
            )
        return self._client_service

    @property
    def ticket_service(self) -> TicketService:
        if self._ticket_service is None:
            self._ticket_service = TicketService(
                self.ticket_repo,
                self.client_service,
                self.audit_service,
                settings=self.settings,
                clock=self.clock,
                rng=self.rng
            )
        return self._ticket_service

    @property
    def inventory_service(self) -> InventoryService:
        if self._inventory_service is None:
            self._inventory_service = InventoryService(
                self.product_repo,
                self.audit_service,
                settings=self.settings
            )
        return self._inventory_service

    @property
    def cart_service(self) -> CartService:
        if self._cart_service is None:
            self._cart_service = CartService(
                self.cart_repo,
                self.inventory_service,
                settings=self.settings
            )
        return self._cart_service

    @property
    def order_service(self) -> OrderService:
        if self._order_service is None:
            self._order_service = OrderService(
                self.order_repo,
                self.cart_service,
                self.client_service,
                self.inventory_service,
                self.audit_service,
                settings=self.settings,
                clock=self.clock
            )
        return self._order_service

    @property
    def invoice_service(self) -> InvoiceService:
        if self._invoice_service is None:
            self._invoice_service = InvoiceService(
                self.invoice_repo,
                self.client_service,
                self.order_service,
                self.audit_service,
                settings=self.settings,
                clock=self.clock,
                rng=self.rng
            )
        return self._invoice_service

    @property
    def receipt_service(self) -> ReceiptService:
        if self._receipt_service is None:
            self._receipt_service = ReceiptService(
                self.client_service,
                self.order_service,
                self.invoice_service,
                settings=self.settings
            )
        return self._receipt_service

    @property
    def stats_service(self) -> StatsService:
        if self._stats_service is None:
            self._stats_service = StatsService(
                self.ticket_service,
                self.client_service,
                self.inventory_service,
                self.order_service,
                settings=self.settings
            )
        return self._stats_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """
        Descarta todos los datos y las instancias creadas.
        El próximo acceso vuelve a construirlas vacías.
        """
        self._client_repo = None
        self._catalog_repo = None
        self._ticket_repo = None
        self._product_repo = None
        self._order_repo = None
        self._cart_repo = None
        self._invoice_repo = None
        self._audit_repo = None

        self._audit_service = None
        self._catalog_service = None
        self._client_service = None
        self._ticket_service = None
        self._inventory_service = None
        self._cart_service = None
        self._order_service = None
        self._invoice_service = None
        self._receipt_service = None
        self._stats_service = None
        logger.debug("Contenedor reiniciado")
