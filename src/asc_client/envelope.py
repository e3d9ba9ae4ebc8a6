"""
JSON:API request body construction.

Every write sends ``{"data": ...}``. Compound writes, which create related
resources in the same request, add an ``included`` array whose entries carry
placeholder ids (see ``local_id``) referenced from the primary resource's
relationships; the server resolves them when it commits the write.
"""

from typing import Any, Dict, Optional, Sequence

from pydantic import BaseModel


def to_json_value(value: Any) -> Any:
    """Convert models (and containers of models) to JSON-ready values."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json_value(item) for key, item in value.items()}
    return value


def build_request_body(data: Any, included: Optional[Sequence[Any]] = None) -> Dict[str, Any]:
    """
    Wrap a payload in the JSON:API top-level envelope.

    Args:
        data: The resource being written, or a list of linkages
        included: Auxiliary resources created together with ``data``

    Returns:
        ``{"data": ...}``, plus ``"included"`` when auxiliary resources are given
    """
    body = {"data": to_json_value(data)}
    if included:
        body["included"] = to_json_value(list(included))
    return body


def local_id(name: str) -> str:
    """Return the placeholder id ``${name}`` for a not-yet-created resource."""
    return "${" + name + "}"


def is_local_id(value: Optional[str]) -> bool:
    return bool(value) and value.startswith("${") and value.endswith("}")
