"""Exception types raised by json-schema-diff."""

from __future__ import annotations

__all__ = ["InvalidSchemaError"]


class InvalidSchemaError(ValueError):
    """A schema document could not be loaded.

    Raised for malformed JSON text, documents whose root is neither an object
    nor a boolean, invalid regular expressions, NaN or infinite numbers, and
    documents nested too deeply to load.  The underlying parser error, if any,
    is available as ``__cause__``.
    """
