# ==============================================================================
# REPOSITORIOS DE PEDIDOS Y CARRITO
# ==============================================================================

from repair_pos.models.entities import CartItem, Order
from repair_pos.repositories.base import DictRepository, ListRepository


class OrderRepository(DictRepository[Order]):
    """Repositorio de pedidos indexado por id."""


class CartRepository(ListRepository[CartItem]):
    """
    Carrito de trabajo: una sola entrada por producto.
    Volver a agregar un producto mueve su entrada al final.
    """

    def put(self, item: CartItem) -> None:
        """Reemplaza la entrada del producto (o la crea) al final del carrito."""
        with self._lock:
            self.remove_product(item.product_id)
            self.append(item)

    def remove_product(self, product_id: str) -> bool:
        """Elimina la entrada de un producto. Retorna True si existía."""
        return self.remove_where(lambda i: i.product_id == product_id) > 0
