"""Domain exceptions."""


class AccessControlError(Exception):
    """Base exception for the access control service."""

    pass


class NotFound(AccessControlError):
    """Requested resource was not found."""

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} '{key}' was not found.")


class Conflict(AccessControlError):
    """Resource would duplicate an existing one."""

    pass


class DomainError(AccessControlError):
    """Operation violates a domain rule."""

    pass


class ValidationError(AccessControlError):
    """Validation failed for input data."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__("One or more validation errors occurred.")
