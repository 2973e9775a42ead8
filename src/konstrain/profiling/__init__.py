# src/konstrain/profiling/__init__.py
"""
Konstrain profiling - infer column constraints from data.
"""

from konstrain.profiling.profiler import ColumnProfiler, profile

__all__ = ["ColumnProfiler", "profile"]
