"""Predicates used to narrow untyped JSON values before they are read.

None of these raise; callers check first and read second.
"""
from __future__ import annotations

import math
from typing import Any


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_not_empty_string(value: Any) -> bool:
    return is_string(value) and len(value) > 0


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and not math.isnan(value)


def is_string_array(value: Any) -> bool:
    return isinstance(value, list) and all(is_string(item) for item in value)


def is_string_map_string_array(value: Any) -> bool:
    return is_object(value) and all(is_string_array(item) for item in value.values())
