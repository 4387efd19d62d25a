"""
Compilation errors.

Every error names the offending constraint or variable so the caller can
report it without inspecting the document again.
"""

from typing import Optional


class CompileError(ValueError):
    """Base class for all model compilation failures."""

    def __init__(self, message: str, entity: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.entity = entity


class SchemaError(CompileError):
    """Wrong shape, missing field, wrong field type or operation count."""


class UnrecognizedOperation(SchemaError):
    """Unknown bound operation keyword."""


class InvalidRange(CompileError):
    """A range operand whose lower end is not strictly below its upper end."""


class UnknownReference(CompileError):
    """A dependent constraint term naming a constraint that does not exist."""
