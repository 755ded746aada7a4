"""
JSON serialization helpers for mixing-mcp.

Tool results mix floats, enums, numpy scalars and pydantic models; these helpers
flatten them into plain JSON and replace inf/nan (not valid per RFC 7159) with null.
"""

import json
import math
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel


def sanitize_for_json(obj: Any) -> Any:
    """
    Recursively sanitize an object for JSON serialization.

    Examples:
        >>> sanitize_for_json({'value': float('inf')})
        {'value': None}
        >>> sanitize_for_json([1.0, float('nan'), 3.0])
        [1.0, None, 3.0]
    """
    if obj is None or isinstance(obj, bool):
        return obj

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, (int, str)):
        return obj

    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            return None
        return obj

    if isinstance(obj, BaseModel):
        return sanitize_for_json(obj.model_dump())

    # numpy scalars and arrays (sweeps)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, (np.integer, np.floating)):
        return sanitize_for_json(obj.item())
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())

    if isinstance(obj, dict):
        return {k: sanitize_for_json(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]

    if hasattr(obj, '__dict__'):
        return sanitize_for_json(vars(obj))

    return str(obj)


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """
    Serialize an object to a JSON string after sanitization.

    Examples:
        >>> safe_json_dumps({'value': float('inf')})
        '{"value": null}'
    """
    return json.dumps(sanitize_for_json(obj), **kwargs)


def is_valid_number(value: float) -> bool:
    """
    Check if a value is a finite number (not inf, nan, or CoolProp _HUGE).

    CoolProp returns _HUGE (approximately 1e308) for invalid states.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if math.isnan(value) or math.isinf(value):
        return False
    if abs(value) > 1e300:
        return False
    return True
