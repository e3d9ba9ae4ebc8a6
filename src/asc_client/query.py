"""
Query option encoding.

Each list endpoint takes a flat option bag whose fields map to the API's
bracketed query keys (``fields[apps]``, ``filter[id]``, ``limit[builds]``...).
Only fields that carry a value are sent.
"""

from enum import Enum
from typing import Any, List, Optional, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

# Characters the API expects verbatim in keys and values
SAFE_QUERY_CHARS = "[],"


def param(key: str) -> Any:
    """Declare an optional query field sent under ``key``."""
    return Field(default=None, alias=key)


class QueryOptions(BaseModel):
    """Base class for query option bags."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_params(self) -> List[Tuple[str, str]]:
        """
        Return the ``(key, value)`` pairs to send, in field declaration order.

        Unset, empty and zero values are skipped; list values are joined with
        commas.
        """
        params = []
        for name, field in type(self).model_fields.items():
            value = _format_value(getattr(self, name))
            if value:
                params.append((field.alias or name, value))
        return params


def _format_value(value: Any) -> Optional[str]:
    if value is None or value is False:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple)):
        items = [_format_value(item) for item in value]
        return ",".join(item for item in items if item)
    if value is True:
        return "true"
    if isinstance(value, int) and value == 0:
        return None
    return str(value)


def encode_query(query: Optional[QueryOptions]) -> str:
    """
    Encode query options as a query string (without the leading ``?``).

    Example:
        >>> encode_query(ListAppsQuery(filter_id=["123"], limit=10))
        'filter[id]=123&limit=10'
    """
    if query is None:
        return ""
    return urlencode(query.to_params(), safe=SAFE_QUERY_CHARS)
