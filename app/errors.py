# app/errors.py
from typing import Any


class StoreError(Exception):
    """Base class for everything a collection store can raise."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    def __init__(self, field: str, message: str = None):
        super().__init__(message or f"field '{field}' is required")
        self.field = field


class ConflictError(StoreError):
    def __init__(self, field: str, value: Any, entity: str = "product"):
        super().__init__(f"a {entity} with {field} '{value}' already exists")
        self.field = field
        self.value = value


class NotFoundError(StoreError):
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(StoreError):
    pass
