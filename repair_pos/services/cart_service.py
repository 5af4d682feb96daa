# ==============================================================================
# SERVICIO DE CARRITO
# ==============================================================================
# Centraliza la lógica del carrito de compras.
# El carrito es un único conjunto de trabajo: una entrada por producto.
# Volver a agregar un producto REEMPLAZA su cantidad (no la suma).
# ==============================================================================

from typing import Any, Dict, List

from repair_pos.config import DEFAULT_SETTINGS, Settings
from repair_pos.exceptions import InvalidReferenceError, ValidationError
from repair_pos.models.entities import CartItem
from repair_pos.money import ZERO, money_str, quantize
from repair_pos.repositories.interfaces import ICartRepository
from repair_pos.services.inventory_service import InventoryService
from repair_pos.services.pricing import Totals, compute_totals

UNKNOWN_PRODUCT = 'Unknown Product'


class CartService:
    """
    Servicio para gestión del carrito de compras.

    Responsabilidades:
    - Agregar/reemplazar/eliminar items del carrito
    - Calcular totales con los precios del catálogo
    - Advertir cantidades mayores al stock
    - Limpiar carrito
    """

    def __init__(
        self,
        cart_repo: ICartRepository,
        inventory_service: InventoryService,
        settings: Settings = DEFAULT_SETTINGS
    ):
        """
        Args:
            cart_repo: Repositorio del carrito
            inventory_service: Servicio de inventario
            settings: Parámetros de negocio
        """
        self.cart_repo = cart_repo
        self.inventory_service = inventory_service
        self.settings = settings

    def get_items(self) -> List[CartItem]:
        """Copia de los items del carrito."""
        return self.cart_repo.get_all()

    def is_empty(self) -> bool:
        return not self.cart_repo.get_all()

    def add_to_cart(self, product_id: str, quantity: int) -> List[CartItem]:
        """
        Agrega un producto o reemplaza su cantidad.

        Args:
            product_id: ID del producto
            quantity: Cantidad (entero positivo)

        Returns:
            Carrito resultante

        Raises:
            ValidationError: Si la cantidad no es un entero positivo
            InvalidReferenceError: Si el producto no existe
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(
                'La cantidad debe ser un entero mayor a 0',
                {'product_id': product_id, 'quantity': quantity}
            )
        if self.settings.enforce_references and not self.inventory_service.product_exists(product_id):
            raise InvalidReferenceError('Producto', product_id)
        self.cart_repo.put(CartItem(product_id=product_id, quantity=quantity))
        return self.get_items()

    def remove_from_cart(self, product_id: str) -> List[CartItem]:
        """Elimina la entrada de un producto (sin error si no estaba)."""
        self.cart_repo.remove_product(product_id)
        return self.get_items()

    def clear_cart(self) -> None:
        """Vacía el carrito completamente."""
        self.cart_repo.clear()

    def compute_totals(self) -> Totals:
        """Totales del carrito con los precios actuales del catálogo."""
        lines = []
        for item in self.get_items():
            product = self.inventory_service.find_product(item.product_id)
            lines.append((item.quantity, product.price if product else ZERO))
        return compute_totals(lines, self.settings.tax_rate)

    def get_cart(self) -> Dict[str, Any]:
        """
        Obtiene el carrito con líneas y totales calculados.

        Returns:
            Dict con items, total_items, items_count, subtotal, tax, total
        """
        items = []
        for item in self.get_items():
            product = self.inventory_service.find_product(item.product_id)
            price = product.price if product else ZERO
            items.append({
                'product_id': item.product_id,
                'name': product.name if product else UNKNOWN_PRODUCT,
                'sku': product.sku if product else '',
                'quantity': item.quantity,
                'unit_price': money_str(price),
                'line_total': money_str(quantize(price * item.quantity)),
            })
        result = {
            'items': items,
            'total_items': sum(i['quantity'] for i in items),
            'items_count': len(items),
        }
        result.update(self.compute_totals().to_dict())
        return result

    def stock_warnings(self) -> List[str]:
        """
        Items cuya cantidad supera el stock actual.

        No bloquea el pedido: el stock puede quedar negativo.
        """
        warnings = []
        for item in self.get_items():
            product = self.inventory_service.find_product(item.product_id)
            if product is None:
                warnings.append(f"Producto {item.product_id} no encontrado")
            elif item.quantity > product.stock:
                warnings.append(
                    f"Stock insuficiente para {product.name}. "
                    f"Solicitado: {item.quantity}, Disponible: {product.stock}"
                )
        return warnings
