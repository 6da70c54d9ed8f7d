"""
Wire-format helpers.

The service speaks snake_case but some deployments answer in camelCase.
Responses are read through `pick`, which accepts either spelling, so the
domain models only ever see one field name.
"""
from typing import Any, Dict, Mapping


def camel_case(name: str) -> str:
    """file_key -> fileKey"""
    head, *tail = name.split('_')
    return head + ''.join(part.title() for part in tail)


def pick(data: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Read a snake_case field, falling back to its camelCase alias."""
    if name in data:
        return data[name]
    return data.get(camel_case(name), default)


def unwrap(body: Any) -> Any:
    """Strip the {"data": {...}} response envelope when present."""
    if isinstance(body, dict) and isinstance(body.get('data'), (dict, list)):
        return body['data']
    return body


def compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values from a request payload."""
    return {k: v for k, v in payload.items() if v is not None}
