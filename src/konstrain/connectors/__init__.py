# src/konstrain/connectors/__init__.py
from konstrain.connectors.reader import coerce_table, read_table, supported_formats

__all__ = ["coerce_table", "read_table", "supported_formats"]
