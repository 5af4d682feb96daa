# ==============================================================================
# REPOSITORIO DE FACTURAS
# ==============================================================================

from typing import Optional

from repair_pos.models.entities import Invoice
from repair_pos.repositories.base import DictRepository


class InvoiceRepository(DictRepository[Invoice]):
    """Repositorio de facturas indexado por id."""

    def get_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """Obtiene una factura por su número."""
        return self.find_by('invoice_number', invoice_number)

    def number_exists(self, invoice_number: str) -> bool:
        return self.get_by_number(invoice_number) is not None
