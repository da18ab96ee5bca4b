"""Utility functions for structwire.

This module provides size calculation and layout inspection for records.
"""

from __future__ import annotations

from .sizing import FieldLayout, encoded_size, field_layout, static_size

__all__ = [
    "FieldLayout",
    "encoded_size",
    "field_layout",
    "static_size",
]
