"""Error taxonomy for the image pipeline.

Every failure in the pipeline surfaces as one of these categories. The API
layer turns them into HTTP responses using ``status_code``; the core never
falls back to a default image or serves partial output.
"""


class PlacecageError(Exception):
    """Base class for all pipeline errors."""

    category: str = "error"
    status_code: int = 500


class InvalidInputError(PlacecageError):
    """Request rejected before any I/O (size limit or unsupported catalog pair)."""

    category = "invalid_input"
    status_code = 400


class DecodeError(PlacecageError):
    """Source image is missing, unreadable, or corrupt.

    The catalog is expected to be internally consistent, so this points at a
    misconfigured ``images/source`` tree rather than a bad request.
    """

    category = "decode_error"
    status_code = 500


class EncodeError(PlacecageError):
    """Output image could not be encoded or written (disk full, permissions)."""

    category = "encode_error"
    status_code = 500


class UnsupportedOperationError(PlacecageError):
    """Image library limits or parameter combinations it cannot handle."""

    category = "unsupported_operation"
    status_code = 500
