# ==============================================================================
# REPOSITORIO BASE - Almacenamiento en memoria
# ==============================================================================
# Los datos viven solo mientras el proceso está activo.
# Toda lectura devuelve COPIAS: modificar un objeto leído no altera el
# almacén; los cambios entran únicamente por los métodos de escritura.
# ==============================================================================

import copy
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')

ID_LENGTH = 9


def new_id() -> str:
    """Identificador corto aleatorio (9 caracteres hexadecimales)."""
    return uuid.uuid4().hex[:ID_LENGTH]


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.

    Cada instancia tiene su propio lock: ninguna operación de escritura
    queda a medias si el contenedor se comparte entre hilos.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._data = self._empty_data()

    @abstractmethod
    def _empty_data(self) -> Any:
        """
        Retorna la estructura de datos vacía para este repositorio.

        Returns:
            Estructura vacía (dict, list, etc.) según el repositorio
        """

    def _read_raw(self) -> Any:
        """Copia profunda de todos los datos."""
        with self._lock:
            return copy.deepcopy(self._data)

    def _write_raw(self, data: Any) -> None:
        """Reemplaza todos los datos por una copia de `data`."""
        with self._lock:
            self._data = copy.deepcopy(data)

    def clear(self) -> None:
        """Vacía el repositorio."""
        with self._lock:
            self._data = self._empty_data()


class DictRepository(BaseRepository, Generic[T]):
    """
    Repositorio para entidades indexadas por id.
    Conserva el orden de inserción.

    Ejemplo: {'a1b2c3d4e': Client(...), ...}
    """

    def _empty_data(self) -> Dict[str, T]:
        return {}

    def next_id(self) -> str:
        """Genera un id que no está en uso."""
        with self._lock:
            record_id = new_id()
            while record_id in self._data:
                record_id = new_id()
            return record_id

    def get_all(self) -> List[T]:
        """
        Obtiene todos los registros.

        Returns:
            Lista (copia) en orden de inserción
        """
        with self._lock:
            return copy.deepcopy(list(self._data.values()))

    def get_by_id(self, record_id: str) -> Optional[T]:
        """
        Obtiene un registro por su ID.

        Args:
            record_id: ID del registro

        Returns:
            Copia del registro o None si no existe
        """
        with self._lock:
            record = self._data.get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def exists(self, record_id: str) -> bool:
        with self._lock:
            return record_id in self._data

    def add(self, record_id: str, record: T) -> None:
        """
        Agrega un registro nuevo.

        Raises:
            KeyError: Si el id ya existe
        """
        with self._lock:
            if record_id in self._data:
                raise KeyError(record_id)
            self._data[record_id] = copy.deepcopy(record)

    def update(self, record_id: str, record: T) -> bool:
        """
        Reemplaza un registro existente.

        Returns:
            True si existía y fue reemplazado
        """
        with self._lock:
            if record_id not in self._data:
                return False
            self._data[record_id] = copy.deepcopy(record)
            return True

    def delete(self, record_id: str) -> Optional[T]:
        """
        Elimina un registro.

        Returns:
            Registro eliminado o None si no existía
        """
        with self._lock:
            return self._data.pop(record_id, None)

    def find_by(self, field: str, value: Any) -> Optional[T]:
        """Primer registro cuyo atributo `field` es igual a `value`."""
        with self._lock:
            for record in self._data.values():
                if getattr(record, field, None) == value:
                    return copy.deepcopy(record)
        return None

    def find_all_by(self, field: str, value: Any) -> List[T]:
        """Todos los registros cuyo atributo `field` es igual a `value`."""
        with self._lock:
            return copy.deepcopy([
                r for r in self._data.values() if getattr(r, field, None) == value
            ])

    def count(self) -> int:
        with self._lock:
            return len(self._data)


class ListRepository(BaseRepository, Generic[T]):
    """
    Repositorio para registros en lista ordenada.

    Ejemplo: carrito → [CartItem, CartItem, ...]
    """

    def _empty_data(self) -> List[T]:
        return []

    def get_all(self) -> List[T]:
        """Copia de la lista completa."""
        return self._read_raw()

    def append(self, record: T) -> None:
        """Agrega un registro al final."""
        with self._lock:
            self._data.append(copy.deepcopy(record))

    def insert_first(self, record: T) -> None:
        """Agrega un registro al inicio."""
        with self._lock:
            self._data.insert(0, copy.deepcopy(record))

    def remove_where(self, predicate: Callable[[T], bool]) -> int:
        """
        Elimina los registros que cumplen el predicado.

        Returns:
            Cantidad de registros eliminados
        """
        with self._lock:
            before = len(self._data)
            self._data = [r for r in self._data if not predicate(r)]
            return before - len(self._data)

    def truncate(self, max_len: int) -> None:
        """Conserva solo los primeros `max_len` registros."""
        with self._lock:
            del self._data[max_len:]

    def count(self) -> int:
        with self._lock:
            return len(self._data)
