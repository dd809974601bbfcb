from __future__ import annotations

from typing import Sequence

from algimg.color_scheme import resolve_color_scheme
from algimg.models import ImageDescriptor, RenderOptions
from algimg.notation import mirror_algorithm
from algimg.visualcube import VISUALCUBE_URL, build_image_url


def generate_images(
    algorithms: Sequence[str],
    options: RenderOptions,
    base_url: str = VISUALCUBE_URL,
) -> list[ImageDescriptor]:
    scheme = resolve_color_scheme(options.top_color)

    images: list[ImageDescriptor] = []
    for alg in algorithms:
        effective = mirror_algorithm(alg) if options.mirror else alg
        url = build_image_url(effective, options, scheme=scheme, base_url=base_url)
        images.append(ImageDescriptor(alg=alg, url=url))
    return images
