# ==============================================================================
# GENERADOR DE CÓDIGOS DE SEGUIMIENTO
# ==============================================================================
# Números de ticket y de factura: {mes en 3 letras}{número de 4 dígitos}
# Ejemplo: oct1234
#
# El esquema NO garantiza unicidad (solo 9000 códigos por mes).
# generate_unique_code() reintenta contra los códigos existentes y falla
# con CollisionError si no encuentra uno libre.
# ==============================================================================

import logging
import random
import re
from datetime import datetime
from typing import Callable, Optional

from repair_pos.config import CODE_MAX_ATTEMPTS
from repair_pos.exceptions import CollisionError

logger = logging.getLogger(__name__)

# Independiente del locale del sistema (strftime('%b') no lo es)
MONTH_ABBREVIATIONS = (
    'jan', 'feb', 'mar', 'apr', 'may', 'jun',
    'jul', 'aug', 'sep', 'oct', 'nov', 'dec',
)

CODE_MIN = 1000
CODE_MAX = 9999
CODE_PATTERN = re.compile(r'^[a-z]{3}\d{4}$')


def generate_code(now: Optional[datetime] = None, rng=None) -> str:
    """
    Genera un código de seguimiento.

    Args:
        now: Fecha de referencia para el prefijo (por defecto, ahora)
        rng: Generador con randint() (por defecto, el módulo random)

    Returns:
        Código como 'oct1234'
    """
    now = now or datetime.now()
    rng = rng or random
    month = MONTH_ABBREVIATIONS[now.month - 1]
    return f"{month}{rng.randint(CODE_MIN, CODE_MAX)}"


def generate_unique_code(
    is_taken: Callable[[str], bool],
    max_attempts: int = CODE_MAX_ATTEMPTS,
    now: Optional[datetime] = None,
    rng=None
) -> str:
    """
    Genera un código que no esté en uso.

    Args:
        is_taken: Función que indica si un código ya existe
        max_attempts: Intentos antes de rendirse
        now: Fecha de referencia para el prefijo
        rng: Generador aleatorio

    Returns:
        Código libre

    Raises:
        CollisionError: Si todos los intentos colisionaron
    """
    for attempt in range(1, max_attempts + 1):
        code = generate_code(now, rng)
        if not is_taken(code):
            return code
        logger.warning("Código %s ya en uso (intento %d/%d)", code, attempt, max_attempts)
    raise CollisionError(
        f"No se pudo generar un código libre tras {max_attempts} intentos",
        {'attempts': max_attempts}
    )


def is_valid_code(code: str) -> bool:
    """Verifica el formato {mes}{4 dígitos}."""
    return bool(CODE_PATTERN.match(code or ''))
