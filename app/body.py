# =============================================================================
# app/body.py - Request Body Parsing
# =============================================================================
# Decodes JSON and URL-encoded request bodies for the /api router.
#
# Usage:
#   from app.body import ParsedBody
#
#   @router.post("/posts")
#   async def create_post(body: ParsedBody):
#       title = body.get("title")
#
# URL-encoded bodies use extended parsing:
#   tags=a&tags=b          -> {"tags": ["a", "b"]}
#   author[name]=Sam       -> {"author": {"name": "Sam"}}
#   ids[]=1&ids[]=2        -> {"ids": ["1", "2"]}
# =============================================================================

import json
import re
from typing import Annotated, Any
from urllib.parse import parse_qsl

from fastapi import Depends, Request

from app.exceptions import InvalidInputError, PayloadTooLargeError

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_KEY_PART = re.compile(r"\[([^\[\]]*)\]")


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


def _split_key(key: str) -> list[str]:
    """Split 'a[b][]' into ['a', 'b', '']."""
    head, bracket, rest = key.partition("[")
    if not bracket or not head:
        return [key]
    parts = _KEY_PART.findall("[" + rest)
    return [head, *parts] if parts else [key]


def _assign(target: dict[str, Any], parts: list[str], value: str) -> None:
    key, *rest = parts

    if not rest:
        if key in target:
            existing = target[key]
            target[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            target[key] = value
        return

    if rest == [""]:
        target.setdefault(key, [])
        if not isinstance(target[key], list):
            target[key] = [target[key]]
        target[key].append(value)
        return

    child = target.setdefault(key, {})
    if not isinstance(child, dict):
        # A plain value already sits under this key; keep the first one
        return
    _assign(child, rest, value)


def parse_urlencoded(raw: str) -> dict[str, Any]:
    """Decode a URL-encoded body with nested keys and repeated values."""
    result: dict[str, Any] = {}
    for key, value in parse_qsl(raw, keep_blank_values=True):
        _assign(result, _split_key(key), value)
    return result


async def parse_body(request: Request) -> Any:
    """
    Parse the request body according to its Content-Type.

    Returns {} for empty bodies and unsupported content types. The result
    is cached on request.state.body.

    Raises:
        PayloadTooLargeError: If the body exceeds BODY_LIMIT_BYTES
        InvalidInputError: If a JSON body can't be decoded or isn't an
            object or array
    """
    if hasattr(request.state, "body"):
        return request.state.body

    limit = request.app.state.context.settings.BODY_LIMIT_BYTES

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(f"Request body exceeds {limit} bytes")

    raw = await request.body()
    if len(raw) > limit:
        raise PayloadTooLargeError(f"Request body exceeds {limit} bytes")

    media_type = _media_type(request)
    body: Any = {}

    if raw and media_type == JSON_CONTENT_TYPE:
        try:
            body = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidInputError(f"Invalid JSON body: {e}") from e
        # Only objects and arrays are accepted at the top level
        if not isinstance(body, (dict, list)):
            raise InvalidInputError("Invalid JSON body: expected an object or array")
    elif raw and media_type == FORM_CONTENT_TYPE:
        try:
            body = parse_urlencoded(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise InvalidInputError("Form body is not valid UTF-8") from e

    request.state.body = body
    return body


# Type alias for dependency injection
ParsedBody = Annotated[Any, Depends(parse_body)]
