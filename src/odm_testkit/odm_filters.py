# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Equality filter construction for repository assertions.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple
import json

from .constants import ModuleConstants
from .odm_protocols import QueryBuilder


def flatten_criteria(criteria: Optional[Mapping[str, Any]]) -> List[Tuple[str, Any]]:
    """
    Turn a flat key/value mapping into ordered (field path, value) pairs.

    A mapping value is one level of nested association: its keys are joined to
    the parent key with a dot. Mappings found below that level are compared as
    whole values.

    Args:
        criteria: Field names mapped to expected values

    Returns:
        List of (field_path, value) pairs in insertion order

    Example:
        >>> flatten_criteria({"name": "davert", "company": {"name": "Codegyre"}})
        [('name', 'davert'), ('company.name', 'Codegyre')]
    """
    pairs: List[Tuple[str, Any]] = []
    if not criteria:
        return pairs

    for key, value in criteria.items():
        if isinstance(value, Mapping) and value:
            for nested_key, nested_value in value.items():
                pairs.append((f"{key}{ModuleConstants.FIELD_PATH_SEPARATOR}{nested_key}", nested_value))
        else:
            pairs.append((key, value))
    return pairs


def build_select_params(query_builder: QueryBuilder, criteria: Optional[Mapping[str, Any]]) -> QueryBuilder:
    """Apply ``field(path).equals(value)`` for every criterion and return the builder."""
    for field_path, value in flatten_criteria(criteria):
        query_builder.field(field_path).equals(value)
    return query_builder


def describe_criteria(criteria: Optional[Mapping[str, Any]]) -> str:
    """JSON rendering of the criteria used in assertion messages."""
    criteria = dict(criteria or {})
    try:
        return json.dumps(criteria, sort_keys=False, default=str)
    except (TypeError, ValueError):
        # Non-string keys or circular values
        return repr(criteria)


def debug_query_builder(query_builder: Any) -> Any:
    """Return the builder's own debug output when it offers one, else its repr."""
    debug = getattr(query_builder, "debug", None)
    if callable(debug):
        return debug()
    return repr(query_builder)


__all__ = [
    "flatten_criteria",
    "build_select_params",
    "describe_criteria",
    "debug_query_builder",
]
