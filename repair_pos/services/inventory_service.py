# ==============================================================================
# SERVICIO DE INVENTARIO
# ==============================================================================
# Catálogo de productos a la venta y ajustes de stock.
#
# El stock NO se limita a cero: un ajuste que lo deja negativo se acepta
# (y queda marcado en auditoría). Evitar la sobreventa es responsabilidad
# de quien llama.
# ==============================================================================

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Union

from repair_pos.config import DEFAULT_CATEGORIES, DEFAULT_SETTINGS, Settings
from repair_pos.exceptions import NotFoundError, ValidationError
from repair_pos.models.commands import ProductCreate, ProductUpdate, parse_command
from repair_pos.models.entities import Product
from repair_pos.repositories.product_repository import ProductRepository
from repair_pos.services.audit_service import AuditService

logger = logging.getLogger(__name__)

CATEGORY_ALL = 'all'


class InventoryService:
    """
    Servicio para gestión de productos.

    Responsabilidades:
    - CRUD de productos (sin baja)
    - Ajustes de stock (entradas y salidas)
    - Búsquedas por texto y categoría
    - Alertas de stock bajo
    - Generación de SKU
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        audit_service: AuditService = None,
        settings: Settings = DEFAULT_SETTINGS
    ):
        """
        Args:
            product_repo: Repositorio de productos
            audit_service: Servicio de auditoría (opcional)
            settings: Parámetros de negocio
        """
        self.product_repo = product_repo
        self.audit_service = audit_service
        self.settings = settings
        self._categories: List[str] = list(DEFAULT_CATEGORIES)

    # =========================================================================
    # OPERACIONES DE PRODUCTOS
    # =========================================================================

    def list_products(self) -> List[Product]:
        return self.product_repo.get_all()

    def find_product(self, pid: str) -> Optional[Product]:
        return self.product_repo.get_by_id(pid)

    def get_product(self, pid: str) -> Product:
        """
        Raises:
            NotFoundError: Si el producto no existe
        """
        product = self.product_repo.get_by_id(pid)
        if product is None:
            raise NotFoundError('Producto', pid)
        return product

    def product_exists(self, pid: str) -> bool:
        return self.product_repo.exists(pid)

    def generate_sku(self, pid: str) -> str:
        """
        Genera un SKU a partir del id.

        Returns:
            SKU en formato "SKU-XXXXX"
        """
        return f"SKU-{pid[:5].upper()}"

    def add_product(self, data: Union[ProductCreate, Dict[str, Any]]) -> Product:
        """
        Crea un producto.

        Args:
            data: name obligatorio; category, price (>= 0), stock, sku,
                  description, image_url opcionales

        Returns:
            Producto creado (SKU generado si no se envió)

        Raises:
            ValidationError: Si falta el nombre o el precio es negativo
        """
        command = parse_command(ProductCreate, data)
        pid = self.product_repo.next_id()
        product = Product(id=pid, **command.model_dump())
        if not product.sku:
            product.sku = self.generate_sku(pid)
        self.product_repo.add(pid, product)

        if product.category and product.category not in self._categories:
            self._categories.append(product.category)

        logger.debug("Producto %s creado", pid)
        if self.audit_service:
            self.audit_service.log_product_created(pid, product.name, product.sku)
        return product

    def update_product(
        self,
        pid: str,
        changes: Union[ProductUpdate, Dict[str, Any]]
    ) -> Product:
        """
        Actualiza los campos enviados de un producto.

        Raises:
            ValidationError: Si un campo es inválido
            NotFoundError: Si el producto no existe
        """
        command = parse_command(ProductUpdate, changes)
        product = self.get_product(pid)
        fields = command.changes()
        updated = replace(product, **fields)
        self.product_repo.update(pid, updated)

        if updated.category and updated.category not in self._categories:
            self._categories.append(updated.category)
        if self.audit_service:
            self.audit_service.log_product_updated(pid, sorted(fields))
        return updated

    # =========================================================================
    # STOCK
    # =========================================================================

    def adjust_stock(self, pid: str, delta: int) -> int:
        """
        Suma `delta` al stock del producto.

        Args:
            pid: ID del producto
            delta: Positivo para reposición, negativo para ventas

        Returns:
            Nuevo stock (puede ser negativo)

        Raises:
            ValidationError: Si delta no es entero
            NotFoundError: Si el producto no existe
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError('El ajuste de stock debe ser un entero', {'delta': delta})
        product = self.get_product(pid)
        new_stock = self.product_repo.adjust_stock(pid, delta)
        if new_stock is None:
            raise NotFoundError('Producto', pid)

        if new_stock < 0:
            logger.warning("Stock negativo para %s: %d", pid, new_stock)
        if self.audit_service:
            self.audit_service.log_stock_adjusted(pid, product.name, delta, product.stock, new_stock)
        return new_stock

    def low_stock_products(self) -> List[Product]:
        """Productos con stock menor al umbral configurado."""
        threshold = self.settings.low_stock_threshold
        return [p for p in self.list_products() if p.stock < threshold]

    # =========================================================================
    # CATEGORÍAS Y BÚSQUEDA
    # =========================================================================

    def categories(self) -> List[str]:
        return list(self._categories)

    def add_category(self, category: str) -> str:
        category = (category or '').strip()
        if not category:
            raise ValidationError('La categoría no puede estar vacía')
        if category not in self._categories:
            self._categories.append(category)
        return category

    def search_products(self, query: str = '', category: str = CATEGORY_ALL) -> List[Product]:
        """
        Busca productos por texto y categoría.

        Args:
            query: Texto en nombre, SKU o descripción (sin distinguir mayúsculas)
            category: 'all' o una categoría exacta

        Returns:
            Productos que coinciden
        """
        q = (query or '').strip().lower()
        results = []
        for product in self.list_products():
            if category and category != CATEGORY_ALL and product.category != category:
                continue
            if q and not (
                q in product.name.lower()
                or q in product.sku.lower()
                or q in product.description.lower()
            ):
                continue
            results.append(product)
        return results

    def search_by_sku(self, sku: str) -> Optional[Product]:
        """Producto con SKU exacto, o None."""
        return self.product_repo.find_by('sku', sku)
