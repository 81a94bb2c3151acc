"""Loads raw input fields from JSON files.

The file holds one JSON object mapping field names to values, e.g.::

    {"strike_prices": "0.133, 0.5", "fmv_price": 10, "short_term_tax_high": "42.74"}

Values stay raw here; FormReader does all coercion.
"""

import json
from pathlib import Path
from typing import Any

from esop.exceptions import InputFileError


def load_fields(file_path: Path) -> dict[str, Any]:
    """Read a JSON object of raw field values."""
    if not file_path.exists():
        raise InputFileError(file_path, "file not found")
    try:
        raw = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise InputFileError(file_path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(raw, dict):
        raise InputFileError(file_path, f"expected a JSON object, got {type(raw).__name__}")
    return raw
