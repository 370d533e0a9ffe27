"""Request body helpers shared by resources."""

from typing import Any

import falcon.asgi

from tenantauth.domain.exceptions import ValidationError


async def json_body(req: falcon.asgi.Request) -> dict[str, Any]:
    body = await req.get_media(default_when_empty=None)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def string_list(body: dict[str, Any], key: str) -> list[str]:
    value = body.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"'{key}' must be a list of strings")
    return value
