# ==============================================================================
# REPOSITORIO DEL CATÁLOGO DE DISPOSITIVOS
# ==============================================================================
# Un único documento con tipos, marcas, modelos y tareas.
# ==============================================================================

from repair_pos.models.entities import CatalogSettings
from repair_pos.repositories.base import BaseRepository


class CatalogRepository(BaseRepository):
    """Repositorio del vocabulario de clasificación de tickets."""

    def _empty_data(self) -> CatalogSettings:
        return CatalogSettings()

    def load(self) -> CatalogSettings:
        """Copia del catálogo completo."""
        return self._read_raw()

    def save(self, settings: CatalogSettings) -> None:
        """Reemplaza el catálogo completo."""
        self._write_raw(settings)
