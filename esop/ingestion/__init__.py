"""Input boundary: raw field values in, sanitized input records out."""

from esop.ingestion.files import load_fields
from esop.ingestion.form_reader import (
    FormReader,
    field_names,
    parse_number,
    parse_strike_prices,
)

__all__ = [
    "FormReader",
    "field_names",
    "load_fields",
    "parse_number",
    "parse_strike_prices",
]
