# ==============================================================================
# EXCEPCIONES DEL DOMINIO
# ==============================================================================
# Cada operación que falla lanza una de estas excepciones ANTES de modificar
# cualquier dato. Ningún error es fatal para el proceso: solo se rechaza
# la operación que lo provocó.
# ==============================================================================

from typing import Any, Dict, Optional


class RepairPosError(Exception):
    """
    Error base del sistema.

    Attributes:
        message: Mensaje legible
        details: Información adicional (campo, valor, etc.)
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Formato {'ok': False, 'error': ...} para la capa de presentación."""
        return {
            'ok': False,
            'error': self.message,
            'type': type(self).__name__,
            'details': self.details,
        }


class ValidationError(RepairPosError):
    """Campo requerido vacío o valor fuera de rango."""


class NotFoundError(RepairPosError):
    """La entidad referenciada por id no existe."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} '{entity_id}' no encontrado",
            {'entity': entity, 'id': entity_id}
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidReferenceError(RepairPosError):
    """Se referencia un cliente o producto que no existe en su registro."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"Referencia inválida: {entity} '{entity_id}' no existe",
            {'entity': entity, 'id': entity_id}
        )
        self.entity = entity
        self.entity_id = entity_id


class CollisionError(RepairPosError):
    """No se pudo generar un código que no esté en uso."""
