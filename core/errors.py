"""Resource error kinds.

These are plain values (not exceptions). They travel inside
``core.result.Failure`` and the HTTP layer maps each kind to one status code:

    ResourceError (base)
    ├── ResourceNotFoundError       -> 404
    ├── ResourceAlreadyExistsError  -> 409
    └── BadResourceError            -> 400
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceError:
    """Base resource error.

    Attributes:
        message: Human-readable message, logged at the HTTP boundary.
        resource_type: Kind of resource involved (``"Book"``).
        resource_id: Identifier of the resource, when known.
    """

    message: str
    resource_type: str
    resource_id: int | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceNotFoundError(ResourceError):
    """Lookup, update or delete target is absent."""


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceAlreadyExistsError(ResourceError):
    """Create collides with an existing id."""


@dataclass(frozen=True, slots=True, kw_only=True)
class BadResourceError(ResourceError):
    """Payload is malformed or fails validation.

    Attributes:
        field: Name of the offending field, if one can be singled out.
    """

    field: str | None = None
