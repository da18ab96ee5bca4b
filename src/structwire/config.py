"""Codec configuration.

The byte order used for the native directive (``"-"``) is an explicit
configuration value rather than whatever the host happens to be. It is
resolved once per process from the environment and can be overridden per
call by passing a :class:`CodecConfig` to ``encode``/``decode``.
"""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass
from functools import lru_cache

from .exceptions import ConfigError

NATIVE_ORDER_ENV = "STRUCTWIRE_NATIVE_ORDER"


class ByteOrder(enum.Enum):
    """Concrete byte order, as understood by :mod:`struct`."""

    LITTLE = "little"
    BIG = "big"

    @property
    def prefix(self) -> str:
        """The :mod:`struct` format prefix for this order."""
        return "<" if self is ByteOrder.LITTLE else ">"

    @classmethod
    def host(cls) -> ByteOrder:
        return cls(sys.byteorder)


@dataclass(frozen=True)
class CodecConfig:
    """Configuration shared by the encoder and decoder.

    Attributes:
        native_order: Byte order applied to scalars and arrays tagged with the
            native directive ``"-"``. Defaults to the host byte order.

    Examples:
        ```python
        from structwire import CodecConfig, ByteOrder, encode

        # Deterministic output regardless of the machine running the tests
        data = encode(record, config=CodecConfig(native_order=ByteOrder.BIG))
        ```
    """

    native_order: ByteOrder = ByteOrder.host()

    @classmethod
    def from_env(cls) -> CodecConfig:
        """Build a configuration from ``STRUCTWIRE_NATIVE_ORDER``.

        Returns:
            CodecConfig with the requested native order, or the host order
            when the variable is unset or empty.

        Raises:
            ConfigError: If the variable holds an unknown byte order
        """
        raw = os.environ.get(NATIVE_ORDER_ENV, "").strip().lower()
        if not raw:
            return cls()
        try:
            return cls(native_order=ByteOrder(raw))
        except ValueError as err:
            raise ConfigError(
                f"{NATIVE_ORDER_ENV} must be 'little' or 'big', got {raw!r}"
            ) from err


@lru_cache(maxsize=None)
def default_config() -> CodecConfig:
    """Return the process-wide default configuration, resolved once."""
    return CodecConfig.from_env()
