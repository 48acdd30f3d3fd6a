"""
JSON Utilities
==============

Thin wrappers around orjson used for credential pairs and config files.

orjson works in bytes; these helpers return ``str`` so callers can drop the
result straight into headers, environment values or text files.
"""

import logging
from typing import Any, Union

import orjson

logger = logging.getLogger(__name__)


def dumps(obj: Any, sort_keys: bool = False, indent: bool = False) -> str:
    """
    Serialize object to JSON string using orjson.

    Args:
        obj: Object to serialize
        sort_keys: Whether to sort dictionary keys (for stable output)
        indent: Pretty-print with two-space indentation

    Returns:
        JSON string
    """
    option = 0
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS
    if indent:
        option |= orjson.OPT_INDENT_2

    # orjson returns bytes, decode to string for compatibility
    return orjson.dumps(obj, option=option).decode("utf-8")


def loads(s: Union[str, bytes]) -> Any:
    """
    Deserialize JSON string using orjson.

    Args:
        s: JSON string or bytes to deserialize

    Returns:
        Deserialized object
    """
    return orjson.loads(s)


JSONDecodeError = orjson.JSONDecodeError
