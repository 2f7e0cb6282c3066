"""
Error taxonomy — everything the core can tell an adapter.

Registration has a single failure mode. Resolution has four, and
each carries the HTTP status the web adapter answers with, so the
adapter never needs to know which stage of resolution failed.
"""

from __future__ import annotations


class DapsdError(Exception):
    """Base class for all dapsd errors."""


class RegistrationError(DapsdError):
    """Raised when a project registration is rejected.

    A rejected registration leaves the registry exactly as it was.
    """


class ResolveError(DapsdError):
    """Base class for serve-request failures."""

    status: int = 500
    label: str = "internal"

    def to_dict(self) -> dict[str, str]:
        return {"error": self.label, "message": str(self)}


class BadAddressingError(ResolveError):
    """The request carries no usable ``<language>.docs`` host."""

    status = 400
    label = "bad-addressing"


class NotFoundError(ResolveError):
    """The language, project or file does not exist.

    ``reason`` is for diagnostics only; every not-found case looks
    the same to the client.
    """

    status = 404
    label = "not-found"

    def __init__(self, message: str, reason: str = "") -> None:
        super().__init__(message)
        self.reason = reason


class ForbiddenError(ResolveError):
    """The requested path would escape the registered directory."""

    status = 403
    label = "forbidden"


class InternalError(ResolveError):
    """Unexpected failure at the I/O layer."""

    status = 500
    label = "internal"
