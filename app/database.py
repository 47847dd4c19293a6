import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel

from .errors import StorageError, ValidationError
from .storage import load_collection, save_collection

logger = logging.getLogger(__name__)

# One lock per collection file, shared by every store object pointing at it.
_LOCKS: Dict[str, asyncio.Lock] = {}

ModelT = TypeVar("ModelT", bound=BaseModel)


def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


def parse_id(value: Any, field: str = "id") -> int:
    """Normalise an id coming from a URL or a stored record to a positive int."""
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be a positive integer, got {value!r}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        parsed = int(value.strip())
    else:
        raise ValidationError(field, f"{field} must be a positive integer, got {value!r}")
    if parsed < 1:
        raise ValidationError(field, f"{field} must be a positive integer, got {value!r}")
    return parsed


def _stored_id(entity: Dict[str, Any]) -> Optional[int]:
    try:
        return parse_id(entity.get("id"))
    except ValidationError:
        return None


class CollectionStore:
    """
    A whole collection kept as one JSON array on disk.

    Nothing is cached: every call re-reads the file. Mutations run their full
    read-modify-write cycle inside ``mutation()`` so concurrent requests
    against the same file cannot overwrite each other.
    """

    entity_name = "entity"

    def __init__(self, path: Path):
        self._path = Path(path)
        self._lock = _get_lock(f"collection:{self._path.resolve()}")
        if not self._path.exists():
            logger.debug("bootstrapping empty %s collection at %s", self.entity_name, self._path)
            save_collection(self._path, [])

    @property
    def path(self) -> Path:
        return self._path

    async def read_all(self) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(load_collection, self._path)

    async def replace_all(self, entities: List[Dict[str, Any]]) -> None:
        await asyncio.to_thread(save_collection, self._path, entities)

    @asynccontextmanager
    async def mutation(self) -> AsyncIterator[None]:
        async with self._lock:
            yield

    @staticmethod
    def next_id(entities: List[Dict[str, Any]]) -> int:
        ids = [i for i in (_stored_id(e) for e in entities) if i is not None]
        return max(ids, default=0) + 1

    @staticmethod
    def find_index(entities: List[Dict[str, Any]], entity_id: Any) -> Optional[int]:
        wanted = parse_id(entity_id)
        for index, entity in enumerate(entities):
            if _stored_id(entity) == wanted:
                return index
        return None

    def _parse_stored(self, model: Type[ModelT], raw: Dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(raw)
        except pydantic.ValidationError as e:
            raise StorageError(f"corrupt {self.entity_name} record in {self._path.name}: {e}") from e
