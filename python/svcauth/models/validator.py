"""
svcauth/models/validator.py

Validates decoded JSON (or any Python object) against a pydantic-compatible
type using TypeAdapter, reporting failures as ValueError.
"""

from typing import Any, Type, TypeVar
from pydantic import ValidationError, TypeAdapter

T = TypeVar("T")


def validate_type(obj: Any, expected_type: Type[T], *, source: str = "value") -> T:
    """
    Validates that obj conforms to expected_type.

    Args:
        obj (Any): The object to validate, e.g. the result of json.load().
        expected_type (Type[T]): A pydantic model or typing construct.
        source (str): Names the object in the error message (e.g. a file path).

    Returns:
        T: The validated object.

    Raises:
        ValueError: If validation fails.
    """
    try:
        return TypeAdapter(expected_type).validate_python(obj)
    except ValidationError as e:
        raise ValueError(f"{source} is not a valid {expected_type}: {e}") from e
