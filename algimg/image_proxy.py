from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from urllib.parse import urlsplit

import httpx
from PIL import Image

logger = logging.getLogger(__name__)

PNG_MEDIA_TYPE = "image/png"
DEFAULT_FETCH_TIMEOUT = 10.0
DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024

_PNG_MODES = {"1", "L", "LA", "I", "P", "RGB", "RGBA"}


class ImageFetchError(RuntimeError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch image {url}: {reason}")
        self.url = url
        self.reason = reason


def looks_like_svg(payload: bytes, content_type: str = "") -> bool:
    if "svg" in content_type.lower():
        return True
    head = payload[:512].lstrip().lower()
    return head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in head)


def _rasterize_svg(payload: bytes) -> bytes:
    import cairosvg

    return cairosvg.svg2png(bytestring=payload)


def convert_to_png(payload: bytes, content_type: str = "") -> bytes:
    """Re-encode an SVG or any raster format Pillow can read as PNG."""
    if looks_like_svg(payload, content_type):
        payload = _rasterize_svg(payload)

    with Image.open(BytesIO(payload)) as image:
        image.load()
        if image.mode not in _PNG_MODES:
            image = image.convert("RGBA")
        buffer = BytesIO()
        image.save(buffer, format="PNG")
    return buffer.getvalue()


@dataclass
class ImageFetcher:
    client: httpx.Client
    max_bytes: int = DEFAULT_MAX_IMAGE_BYTES

    @classmethod
    def create(
        cls,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        max_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> "ImageFetcher":
        if max_bytes < 1:
            raise ValueError("max_bytes must be >= 1")
        client = httpx.Client(timeout=timeout, follow_redirects=True, transport=transport)
        return cls(client=client, max_bytes=max_bytes)

    def fetch_raw(self, url: str) -> tuple[bytes, str]:
        if urlsplit(url).scheme not in {"http", "https"}:
            raise ImageFetchError(url, "only http(s) URLs are supported")

        try:
            with self.client.stream("GET", url) as response:
                response.raise_for_status()
                payload = self._read_capped(url, response)
                content_type = response.headers.get("content-type", "")
        except httpx.HTTPStatusError as exc:
            raise ImageFetchError(url, f"upstream returned {exc.response.status_code}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ImageFetchError(url, str(exc) or exc.__class__.__name__) from exc

        return payload, content_type

    def _read_capped(self, url: str, response: httpx.Response) -> bytes:
        declared = response.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_bytes:
            raise ImageFetchError(url, f"image exceeds {self.max_bytes} bytes")

        chunks: list[bytes] = []
        total = 0
        for chunk in response.iter_bytes():
            total += len(chunk)
            if total > self.max_bytes:
                raise ImageFetchError(url, f"image exceeds {self.max_bytes} bytes")
            chunks.append(chunk)
        return b"".join(chunks)

    def fetch_png(self, url: str) -> bytes:
        payload, content_type = self.fetch_raw(url)
        try:
            png = convert_to_png(payload, content_type)
        except (OSError, ValueError, SyntaxError) as exc:
            raise ImageFetchError(url, f"could not decode image: {exc}") from exc

        logger.debug("Converted %s (%s, %d bytes) to PNG", url, content_type or "unknown", len(payload))
        return png

    def close(self) -> None:
        self.client.close()
