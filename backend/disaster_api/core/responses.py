"""Response Envelopes - uniform success/error bodies for every endpoint.

Invariants:
    - Success: {status, message, data}
    - Validation error: {status, errors: {field: [messages]}}
    - Any other error: {status, message}
"""

from typing import Any


def success_envelope(status: int, message: str, data: Any) -> dict:
    return {"status": status, "message": message, "data": data}


def error_envelope(status: int, message: str) -> dict:
    return {"status": status, "message": message}


def validation_error_envelope(status: int, errors: dict[str, list[str]]) -> dict:
    return {"status": status, "errors": errors}


def group_field_errors(errors: list[dict]) -> dict[str, list[str]]:
    """Fold Pydantic error dicts into {dotted.field: [messages]}.

    The leading location segment (body, path, query, header) is dropped so keys
    match the submitted payload, e.g. ("body", "disaster_types", 1) ->
    "disaster_types.1".
    """
    grouped: dict[str, list[str]] = {}
    for err in errors:
        loc = list(err.get("loc", ()))
        if len(loc) > 1 and loc[0] in ("body", "path", "query", "header"):
            loc = loc[1:]
        key = ".".join(str(part) for part in loc) or "body"
        grouped.setdefault(key, []).append(err.get("msg", "Invalid value"))
    return grouped
