"""Exception taxonomy for spatial shapes.

Every error raised by this package inherits from ``SpatialError`` and
carries a machine-readable ``code`` next to its message, so callers
(and the HTTP layer) can report failures with stable keys.

Taxonomy
--------
- ``ConfigurationError``        invalid unit / calculator / world-bounds
  combination when building a context. Fatal.
- ``InvalidShapeError``         coordinates or parameters that cannot form
  a shape (non-finite values, minY > maxY, empty collection).
- ``ShapeParseError``           malformed shape text. The whole input is
  rejected; nothing is partially parsed.
- ``UnsupportedOperationError`` a shape kind or operation this context
  does not handle (e.g. polygon WKT, writing a collection as text).

None of these are retryable: they describe bad input, not transient state.
"""

from __future__ import annotations


class SpatialError(Exception):
    """Base exception for all spatial-domain errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. ``"SHAPE_PARSE_FAILED"``).
    """

    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = "SPATIAL_ERROR"

    def __init__(self, message: str = "", *, code: str = "") -> None:
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {"error": self.code, "message": self.message}


class ConfigurationError(SpatialError):
    """Invalid spatial context configuration."""

    default_code = "CONFIG_INVALID"


class InvalidShapeError(SpatialError):
    """Shape parameters that cannot form a valid shape."""

    default_code = "SHAPE_INVALID"


class ShapeParseError(InvalidShapeError):
    """Malformed shape text.

    Attributes:
        text: The rejected input.
    """

    default_code = "SHAPE_PARSE_FAILED"

    def __init__(self, message: str = "", *, text: str = "", code: str = "") -> None:
        self.text = text
        super().__init__(message, code=code)

    def to_error_dict(self) -> dict[str, object]:
        payload = super().to_error_dict()
        payload["text"] = self.text
        return payload


class UnsupportedOperationError(SpatialError):
    """Operation or shape kind not supported by this context."""

    default_code = "UNSUPPORTED_OPERATION"
