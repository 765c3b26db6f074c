"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity (e.g. a taken slug)."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class InvalidStateError(Exception):
    """Raised when an operation is not allowed from the entity's current status."""

    def __init__(self, entity_type: str, entity_id: str, status: str, message: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.status = status
        super().__init__(message)


class InvalidSlugError(ValueError):
    """Raised when no usable slug can be derived from the given input."""

    def __init__(self, source: str):
        self.source = source
        super().__init__(f"Could not derive a slug from '{source}'")


class StorageError(Exception):
    """Raised when the persistence layer fails.

    The message is safe to log but must never be shown to API callers;
    the original driver exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Storage failure during {operation}")
