"""Exception hierarchy for structwire.

The codec itself never raises for malformed data: bad input degrades into a
partially populated record. These exceptions cover the places where a caller
made a mistake that can be reported up front, such as a record declaration
that cannot be compiled or a configuration value that makes no sense.
"""

from __future__ import annotations


class StructwireError(Exception):
    """Base exception for all structwire errors."""

    pass


class SchemaError(StructwireError):
    """Raised when a record declaration cannot be compiled.

    Examples:
        - Unknown ctype name (e.g. ``"int24"``)
        - Negative fixed-array length
        - Wire metadata that is not a mapping
    """

    pass


class ConfigError(StructwireError):
    """Raised when a codec configuration value is invalid.

    Examples:
        - ``STRUCTWIRE_NATIVE_ORDER`` set to something other than
          ``little`` or ``big``
    """

    pass
