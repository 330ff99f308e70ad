"""Custom exceptions for test data generation and the DAO layer."""


class DataGenerationError(Exception):
    """Base exception for all data generation errors."""

    pass


class UniqueValueExhaustedError(DataGenerationError):
    """Raised when no unused value is drawn within the retry budget."""

    def __init__(self, label: str, attempts: int):
        self.label = label
        self.attempts = attempts
        super().__init__(
            f"Could not draw a unique {label} after {attempts} attempts"
        )


class MissingParentDataError(DataGenerationError):
    """Raised when a phase needs parent rows that were never generated."""

    def __init__(self, entity: str, parent: str):
        self.entity = entity
        self.parent = parent
        super().__init__(f"Cannot generate {entity} without any {parent}")


class EntityNotFoundError(DataGenerationError):
    """Raised when an update targets a row that does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidOrderStatusError(DataGenerationError):
    """Raised when an order status is not one of the known statuses."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Invalid order status: {status}")


class DatasetError(DataGenerationError):
    """Raised when a CSV dataset cannot be loaded or does not match."""

    pass
