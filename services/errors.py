"""Error types shared by the query layer, the request mapper and the routes."""

from __future__ import annotations


class NotFoundError(LookupError):
    """Raised when a single-row query matches nothing."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} was not found.")
        self.entity = entity
        self.entity_id = entity_id


class RequestValidationError(ValueError):
    """Raised when a request payload cannot be mapped to query parameters.

    ``errors`` maps field names to the messages collected for them.
    """

    def __init__(self, errors: dict[str, list[str]], message: str = "The request is invalid."):
        super().__init__(message)
        self.message = message
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "RequestValidationError":
        return cls({field: [message]}, message)


__all__ = ["NotFoundError", "RequestValidationError"]
