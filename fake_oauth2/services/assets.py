from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"

# URL path -> (file under static/, content type)
_ASSETS: dict[str, tuple[str, str]] = {
    "/fake-cloud.gov.svg": ("fake-cloud.gov.svg", "image/svg+xml"),
    "/style.css": ("style.css", "text/css"),
}


@dataclass(frozen=True, slots=True)
class Asset:
    body: bytes
    content_type: str


class AssetResolver:
    """Looks up the login page's static files by URL path."""

    def __init__(self, root: Path = STATIC_DIR) -> None:
        self._root = root

    def resolve(self, path: str) -> Asset | None:
        entry = _ASSETS.get(path)
        if entry is None:
            return None
        filename, content_type = entry
        return Asset(body=(self._root / filename).read_bytes(), content_type=content_type)


asset_resolver = AssetResolver()
