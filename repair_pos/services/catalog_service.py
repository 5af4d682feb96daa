# ==============================================================================
# SERVICIO DE CATÁLOGO DE DISPOSITIVOS
# ==============================================================================
# Vocabulario controlado para clasificar tickets: tipos de dispositivo,
# marcas, modelos y tareas.
#
# REGLAS:
# - Agregar NO rechaza duplicados: quien llama verifica antes (has_*/ensure_*)
# - Eliminar una marca elimina sus modelos (cascada)
# - Renombrar una marca reescribe brand_id en sus modelos (cascada)
# - Ningún cambio del catálogo toca los tickets existentes: conservan el
#   texto con el que se crearon (el catálogo es una taxonomía, no una FK)
# ==============================================================================

import logging
from typing import List

from repair_pos.exceptions import NotFoundError, ValidationError
from repair_pos.models.entities import CatalogSettings, DeviceModel
from repair_pos.repositories.base import new_id
from repair_pos.repositories.interfaces import ICatalogRepository
from repair_pos.services.audit_service import AuditService

logger = logging.getLogger(__name__)

# kind → (atributo en CatalogSettings, nombre legible)
_VOCABULARIES = {
    'device_type': ('device_types', 'Tipo de dispositivo'),
    'brand': ('brands', 'Marca'),
    'task': ('tasks', 'Tarea'),
}


def _clean(value: str, label: str) -> str:
    value = (value or '').strip()
    if not value:
        raise ValidationError(f"{label} no puede estar vacío", {'field': label})
    return value


def _matches(values: List[str], query: str) -> List[str]:
    q = (query or '').strip().lower()
    return [v for v in values if q in v.lower()]


class CatalogService:
    """
    Servicio para gestión del catálogo de dispositivos.

    Responsabilidades:
    - Altas, bajas y renombrados de tipos, marcas, modelos y tareas
    - Cascadas marca → modelos
    - Búsquedas para los selectores del formulario de tickets
    """

    def __init__(self, catalog_repo: ICatalogRepository, audit_service: AuditService = None):
        """
        Args:
            catalog_repo: Repositorio del catálogo
            audit_service: Servicio de auditoría (opcional)
        """
        self.catalog_repo = catalog_repo
        self.audit_service = audit_service

    def _audit(self, action: str, kind: str, value: str, new_value: str = '') -> None:
        logger.debug("Catálogo %s %s: %s %s", action, kind, value, new_value)
        if self.audit_service:
            self.audit_service.log_catalog_change(action, kind, value, new_value)

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_settings(self) -> CatalogSettings:
        """Copia completa del catálogo."""
        return self.catalog_repo.load()

    def device_types(self) -> List[str]:
        return self.get_settings().device_types

    def brands(self) -> List[str]:
        return self.get_settings().brands

    def tasks(self) -> List[str]:
        return self.get_settings().tasks

    def models(self) -> List[DeviceModel]:
        return self.get_settings().models

    def models_for_brand(self, brand: str) -> List[DeviceModel]:
        """Modelos cuya marca es `brand`."""
        return [m for m in self.models() if m.brand_id == brand]

    def search_device_types(self, query: str) -> List[str]:
        """Tipos que contienen `query` (sin distinguir mayúsculas)."""
        return _matches(self.device_types(), query)

    def search_brands(self, query: str) -> List[str]:
        """Marcas que contienen `query` (sin distinguir mayúsculas)."""
        return _matches(self.brands(), query)

    def has_device_type(self, value: str) -> bool:
        return value in self.device_types()

    def has_brand(self, value: str) -> bool:
        return value in self.brands()

    def has_task(self, value: str) -> bool:
        return value in self.tasks()

    # =========================================================================
    # VOCABULARIOS SIMPLES (tipos, marcas, tareas)
    # =========================================================================

    def _add_value(self, kind: str, value: str) -> str:
        attr, label = _VOCABULARIES[kind]
        value = _clean(value, label)
        settings = self.catalog_repo.load()
        getattr(settings, attr).append(value)
        self.catalog_repo.save(settings)
        self._audit('add', kind, value)
        return value

    def _remove_value(self, kind: str, value: str) -> CatalogSettings:
        attr, label = _VOCABULARIES[kind]
        settings = self.catalog_repo.load()
        values = getattr(settings, attr)
        if value not in values:
            raise NotFoundError(label, value)
        setattr(settings, attr, [v for v in values if v != value])
        return settings

    def _rename_value(self, kind: str, old: str, new: str) -> CatalogSettings:
        attr, label = _VOCABULARIES[kind]
        new = _clean(new, label)
        settings = self.catalog_repo.load()
        values = getattr(settings, attr)
        if old not in values:
            raise NotFoundError(label, old)
        setattr(settings, attr, [new if v == old else v for v in values])
        return settings

    def _ensure_value(self, kind: str, value: str) -> str:
        attr, label = _VOCABULARIES[kind]
        value = _clean(value, label)
        if value not in getattr(self.catalog_repo.load(), attr):
            self._add_value(kind, value)
        return value

    def add_device_type(self, value: str) -> str:
        return self._add_value('device_type', value)

    def remove_device_type(self, value: str) -> None:
        self.catalog_repo.save(self._remove_value('device_type', value))
        self._audit('remove', 'device_type', value)

    def update_device_type(self, old: str, new: str) -> None:
        settings = self._rename_value('device_type', old, new)
        self.catalog_repo.save(settings)
        self._audit('rename', 'device_type', old, new.strip())

    def ensure_device_type(self, value: str) -> str:
        """Agrega el tipo solo si no existe (flujo "seleccionar o crear")."""
        return self._ensure_value('device_type', value)

    def add_brand(self, value: str) -> str:
        return self._add_value('brand', value)

    def remove_brand(self, brand: str) -> None:
        """
        Elimina una marca y TODOS sus modelos.

        Raises:
            NotFoundError: Si la marca no existe
        """
        settings = self._remove_value('brand', brand)
        settings.models = [m for m in settings.models if m.brand_id != brand]
        self.catalog_repo.save(settings)
        self._audit('remove', 'brand', brand)

    def update_brand(self, old: str, new: str) -> None:
        """
        Renombra una marca y reescribe brand_id en sus modelos.

        La identidad de la marca es su texto: no hay id estable.

        Raises:
            NotFoundError: Si la marca no existe
        """
        settings = self._rename_value('brand', old, new)
        new = new.strip()
        for model in settings.models:
            if model.brand_id == old:
                model.brand_id = new
        self.catalog_repo.save(settings)
        self._audit('rename', 'brand', old, new)

    def ensure_brand(self, value: str) -> str:
        return self._ensure_value('brand', value)

    def add_task(self, value: str) -> str:
        return self._add_value('task', value)

    def remove_task(self, value: str) -> None:
        self.catalog_repo.save(self._remove_value('task', value))
        self._audit('remove', 'task', value)

    def update_task(self, old: str, new: str) -> None:
        settings = self._rename_value('task', old, new)
        self.catalog_repo.save(settings)
        self._audit('rename', 'task', old, new.strip())

    def ensure_task(self, value: str) -> str:
        return self._ensure_value('task', value)

    # =========================================================================
    # MODELOS
    # =========================================================================

    def add_model(self, name: str, brand_id: str) -> DeviceModel:
        """
        Agrega un modelo a una marca.

        brand_id es una referencia débil: no se verifica que la marca exista.

        Returns:
            Modelo creado con su id
        """
        model = DeviceModel(
            id=new_id(),
            name=_clean(name, 'Modelo'),
            brand_id=_clean(brand_id, 'Marca'),
        )
        settings = self.catalog_repo.load()
        settings.models.append(model)
        self.catalog_repo.save(settings)
        self._audit('add', 'model', model.name)
        return model

    def remove_model(self, model_id: str) -> None:
        settings = self.catalog_repo.load()
        remaining = [m for m in settings.models if m.id != model_id]
        if len(remaining) == len(settings.models):
            raise NotFoundError('Modelo', model_id)
        settings.models = remaining
        self.catalog_repo.save(settings)
        self._audit('remove', 'model', model_id)

    def update_model(self, model_id: str, name: str) -> DeviceModel:
        """Renombra un modelo (mantiene id y marca)."""
        name = _clean(name, 'Modelo')
        settings = self.catalog_repo.load()
        for model in settings.models:
            if model.id == model_id:
                old_name = model.name
                model.name = name
                self.catalog_repo.save(settings)
                self._audit('rename', 'model', old_name, name)
                return model
        raise NotFoundError('Modelo', model_id)
