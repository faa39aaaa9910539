"""
Typed Tonie cloud API endpoints.

Each function takes a configured HttpClient and turns raw JSON into domain models.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from toniebox.exceptions import ResponseDecodeError

T = TypeVar("T")


def decode(endpoint: str, parse: Callable[[Any], T], data: Any) -> T:
    """
    Parse a decoded JSON value into a model.

    Raises:
        ResponseDecodeError: If the value does not have the expected shape.
    """
    try:
        return parse(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        msg = f"Unexpected response shape: {type(e).__name__}: {e}"
        raise ResponseDecodeError(msg, endpoint=endpoint) from e


def decode_list(endpoint: str, parse: Callable[[Any], T], data: Any) -> list[T]:
    """Parse a JSON array, each item with ``parse``."""
    if not isinstance(data, list):
        msg = f"Expected a JSON array, got {type(data).__name__}"
        raise ResponseDecodeError(msg, endpoint=endpoint)
    return [decode(endpoint, parse, item) for item in data]
