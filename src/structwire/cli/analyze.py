"""Record layout analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from structlog import get_logger

from ..config import default_config
from ..models.base import BaseRecord
from ..utils.sizing import field_layout, static_size

logger = get_logger()


def analyze_file(file_path: Path) -> None:
    """Print the wire layout of every BaseRecord class in a Python file.

    Args:
        file_path: Path to Python file containing record definitions
    """
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Only classes defined in this file, not imported ones
    record_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not BaseRecord and issubclass(obj, BaseRecord) and obj.__module__ == "user_module"
    ]
    logger.debug("records found", path=str(file_path), count=len(record_classes))

    if not record_classes:
        print(f"No BaseRecord classes found in {file_path}")
        return

    print("|" * 7, "structwire: directive-driven binary records", "|" * 7)
    print(f"{len(record_classes)} record{'s' if len(record_classes) != 1 else ''} loaded.")
    print(f"Native byte order: {default_config().native_order.value}")
    print("Field sizes are in bytes.")
    print()

    for record_class in record_classes:
        analyze_record_class(record_class)


def analyze_record_class(record_class: type[BaseRecord]) -> None:
    """Print the field-by-field wire layout of one record class.

    Args:
        record_class: Record class to analyze
    """
    print(f"{'=' * 19} {record_class.__name__} {'=' * 19}")

    size = static_size(record_class)
    if size is None:
        print("Encoded size: variable (trailing text or sequence)")
    else:
        print(f"Encoded size: {size} bytes")
    print()

    for i, layout in enumerate(field_layout(record_class), 1):
        directive = f'"{layout.directive}"' if layout.directive is not None else "unset"
        field_desc = f"{i}. {layout.name}"
        info = f"{layout.kind.value}, {directive}"

        if not layout.participates:
            width = "skipped"
        elif layout.size is None:
            width = "dynamic"
        else:
            width = f"{layout.size} bytes"

        dots = "." * max(1, 54 - len(field_desc) - len(width) - len(info) - 1)
        print(f"        {field_desc}{dots}{width} {info}")

    print()
