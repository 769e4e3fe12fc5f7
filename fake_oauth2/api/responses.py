"""Response helpers with exact Content-Type values.

Starlette appends "; charset=utf-8" to text/* media types.  Clients of
this server compare Content-Type literally ("text/plain", "text/html"),
so these helpers set the header themselves, which switches that off.
"""

from __future__ import annotations

from fastapi import Response

NOT_FOUND_BODY = "404 page not found"


def typed_response(
    content: str | bytes, content_type: str, status_code: int = 200
) -> Response:
    return Response(
        content=content,
        status_code=status_code,
        headers={"Content-Type": content_type},
    )


def plain_text(body: str, status_code: int) -> Response:
    return typed_response(body, "text/plain", status_code)


def not_found() -> Response:
    return plain_text(NOT_FOUND_BODY, 404)
