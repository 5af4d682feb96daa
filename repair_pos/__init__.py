# ==============================================================================
# repair_pos - Gestión de un taller de reparaciones con punto de venta
# ==============================================================================
# models/        → Entidades y comandos de entrada
# repositories/  → Almacenamiento en memoria
# services/      → Reglas de negocio
# app_container  → Conexión de repositorios y servicios
# ==============================================================================

import logging

from repair_pos.app_container import AppContainer
from repair_pos.config import DEFAULT_SETTINGS, Settings
from repair_pos.exceptions import (
    CollisionError,
    InvalidReferenceError,
    NotFoundError,
    RepairPosError,
    ValidationError,
)

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'AppContainer',
    'DEFAULT_SETTINGS',
    'Settings',
    'CollisionError',
    'InvalidReferenceError',
    'NotFoundError',
    'RepairPosError',
    'ValidationError',
    '__version__',
]
