"""
Checked access to a parsed JSON model document.

The compiler receives plain Python objects (dict, list, str, int, float,
bool, None) as produced by `json.load`. Each accessor validates the shape
it expects and raises SchemaError naming the entity being read, so every
read of the document doubles as a schema check.
"""

import json
import math
import numbers
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from ..errors import SchemaError


def is_number(value: Any) -> bool:
    """
    Check whether a document value is a usable number.

    Booleans are rejected even though `bool` subclasses `int`, and so are
    NaN and infinities.

    Examples
    --------
    >>> is_number(2)
    True
    >>> is_number(True)
    False
    >>> is_number(float("nan"))
    False
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def get_field(obj: Mapping, key: str, default: Any = None) -> Any:
    """Return `obj[key]`, or `default` if the key is absent."""
    return obj.get(key, default)


def expect_object(value: Any, what: str, entity: Optional[str] = None) -> Mapping:
    """
    Require a mapping (JSON object).

    Parameters
    ----------
    value : any
        The document value.
    what : str
        Description used in the error message, e.g. "constraint 'c1'".
    entity : str, optional
        Name of the offending constraint or variable.

    Returns
    -------
    Mapping
        `value` unchanged.

    Raises
    ------
    SchemaError
        If `value` is not a mapping.
    """
    if not isinstance(value, Mapping):
        raise SchemaError(
            f"{what} must be an object, got {_type_name(value)}", entity
        )
    return value


def expect_number(value: Any, what: str, entity: Optional[str] = None) -> float:
    """
    Require a finite number and return it as float.

    Raises
    ------
    SchemaError
        If `value` is missing, boolean, non-numeric or not finite.
    """
    if not is_number(value):
        raise SchemaError(
            f"{what} must be a finite number, got {_describe(value)}", entity
        )
    return float(value)


def expect_string(value: Any, what: str, entity: Optional[str] = None) -> str:
    """Require a string."""
    if not isinstance(value, str):
        raise SchemaError(
            f"{what} must be a string, got {_describe(value)}", entity
        )
    return value


def expect_pair(value: Any, what: str, entity: Optional[str] = None) -> Tuple[float, float]:
    """
    Require a two-element numeric array.

    Returns
    -------
    tuple of (float, float)

    Raises
    ------
    SchemaError
        If `value` is not a list/tuple of exactly two numbers.
    """
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise SchemaError(
            f"{what} must be a two-element array, got {_describe(value)}", entity
        )
    first = expect_number(value[0], f"{what}[0]", entity)
    second = expect_number(value[1], f"{what}[1]", entity)
    return first, second


def load_document(path: Union[str, Path]) -> Any:
    """
    Read a model document from a JSON file.

    Key order is preserved, so rows and columns are numbered in the order
    they appear in the file.

    Raises
    ------
    FileNotFoundError
        If `path` does not exist.
    SchemaError
        If the file is not valid UTF-8 or not valid JSON.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaError(f"{path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise SchemaError(f"{path} is not valid UTF-8: {e}") from e


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, numbers.Real):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, (Mapping, list, tuple)):
        return _type_name(value)
    return f"{_type_name(value)} {value!r}"
