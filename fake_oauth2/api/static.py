from __future__ import annotations

from fastapi import APIRouter, Request, Response

from fake_oauth2.api.responses import not_found, typed_response
from fake_oauth2.services.assets import asset_resolver

router = APIRouter(tags=["static"])


# Catch-all: must be the last router included so it never shadows a real route.
@router.get("/{asset_path:path}", include_in_schema=False)
def static_asset(asset_path: str, request: Request) -> Response:
    asset = asset_resolver.resolve(request.url.path)
    if asset is None:
        return not_found()
    return typed_response(asset.body, asset.content_type)
