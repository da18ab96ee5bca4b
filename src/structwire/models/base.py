"""Base record class for structwire.

This module provides the BaseRecord class that all wire records inherit from.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class BaseRecord(BaseModel):
    """Base class for all structwire records.

    Fields are laid out on the wire in declaration order. Attach directives
    with the helpers in :mod:`structwire.models.fields`; fields without one
    are carried by the model but never serialized.

    Every field the caller does not supply starts at its zero value (0, "",
    b"", [], a zero nested record, ...), so ``Record()`` is always a valid
    target for :func:`structwire.decode`.

    Example:
        >>> class Reading(BaseRecord):
        ...     sensor_id: int = Uint16("be")
        ...     samples: list[int] = Int16("le")
        >>>
        >>> Reading()
        Reading(sensor_id=0, samples=[])
    """

    model_config = ConfigDict(
        strict=False,
        # Queues, callables and other unserializable references may be declared
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="forbid",
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_zero_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        # Imported lazily: the schema module imports this one
        from ..codec.schema import MISSING, RecordSchema, zero_value

        schema = RecordSchema.for_record(cls)
        filled = dict(data)
        for spec in schema.fields:
            info = cls.model_fields[spec.name]
            if spec.name in filled or not info.is_required():
                continue
            alias = info.alias
            if alias is not None and alias in filled:
                continue
            zero = zero_value(spec)
            if zero is not MISSING:
                filled[spec.name] = zero
        return filled
