"""Error types raised by repositories and configuration loading."""


class RecicloError(Exception):
    """Base class for application errors."""


class PointNotFound(RecicloError):
    """No point matches the given id."""

    def __init__(self, point_id: str):
        super().__init__(f"Point not found: {point_id}")
        self.point_id = point_id


class PointValidationError(RecicloError):
    """Point fields are missing or malformed. `errors` holds one message per violation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors) or "invalid point")
        self.errors = errors


class PersistenceError(RecicloError):
    """The document store is unreachable or rejected the operation."""


class ConfigurationError(RecicloError):
    """A required environment variable is missing or malformed."""
