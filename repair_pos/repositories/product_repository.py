# ==============================================================================
# REPOSITORIO DE PRODUCTOS
# ==============================================================================

from typing import Optional

from repair_pos.models.entities import Product
from repair_pos.repositories.base import DictRepository


class ProductRepository(DictRepository[Product]):
    """Repositorio de productos indexado por id."""

    def adjust_stock(self, pid: str, delta: int) -> Optional[int]:
        """
        Suma `delta` al stock de un producto, sin límite inferior.

        Args:
            pid: ID del producto
            delta: Cantidad a sumar (negativa para ventas)

        Returns:
            Nuevo stock, o None si el producto no existe
        """
        with self._lock:
            product = self._data.get(pid)
            if product is None:
                return None
            product.stock = product.stock + delta
            return product.stock
