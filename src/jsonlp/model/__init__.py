"""
Model document module.

Implements:
- Checked accessors over a parsed JSON model document
- Symbol table mapping constraint/variable names to 1-based indices
"""

from .document import (
    is_number,
    get_field,
    expect_object,
    expect_number,
    expect_string,
    expect_pair,
    load_document,
)

from .symbols import SymbolTable

__all__ = [
    # Document access
    "is_number",
    "get_field",
    "expect_object",
    "expect_number",
    "expect_string",
    "expect_pair",
    "load_document",
    # Symbols
    "SymbolTable",
]
