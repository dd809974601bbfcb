from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import httpx

from algimg.config import ServiceConfig
from algimg.generator import generate_images
from algimg.image_proxy import ImageFetcher
from algimg.models import ImageDescriptor, PackagedArtifact, RenderOptions
from algimg.notation import sanitize_algorithms
from algimg.packager import package_images


@dataclass
class AlgImageService:
    config: ServiceConfig
    fetcher: ImageFetcher

    @classmethod
    def create(
        cls,
        config: ServiceConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "AlgImageService":
        cfg = config or ServiceConfig.from_env()
        fetcher = ImageFetcher.create(
            timeout=cfg.fetch_timeout,
            transport=transport,
            max_bytes=cfg.max_image_bytes,
        )
        return cls(config=cfg, fetcher=fetcher)

    def sanitize(self, text: str) -> list[str]:
        return sanitize_algorithms(text)

    def generate(self, algorithms: Sequence[str], options: RenderOptions) -> list[ImageDescriptor]:
        return generate_images(algorithms, options, base_url=self.config.visualcube_url)

    def fetch_image(self, url: str) -> bytes:
        return self.fetcher.fetch_png(url)

    def package(self, descriptors: Sequence[ImageDescriptor]) -> PackagedArtifact | None:
        return package_images(descriptors, self.fetcher.fetch_png, max_workers=self.config.max_workers)

    def close(self) -> None:
        self.fetcher.close()
