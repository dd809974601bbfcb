from algimg.color_scheme import COLOR_SCHEMES, resolve_color_scheme
from algimg.config import ServiceConfig
from algimg.generator import generate_images
from algimg.image_proxy import ImageFetchError, ImageFetcher, convert_to_png
from algimg.models import (
    IMAGE_SIZES,
    PUZZLE_ORDERS,
    FetchOutcome,
    ImageDescriptor,
    PackagedArtifact,
    RenderOptions,
    Stage,
    TopColor,
)
from algimg.notation import mirror_algorithm, mirror_move, sanitize_algorithms, sanitize_line
from algimg.packager import collect_outcomes, package_images
from algimg.service import AlgImageService
from algimg.visualcube import VISUALCUBE_URL, build_image_url

__all__ = [
    "AlgImageService",
    "COLOR_SCHEMES",
    "FetchOutcome",
    "IMAGE_SIZES",
    "ImageDescriptor",
    "ImageFetchError",
    "ImageFetcher",
    "PUZZLE_ORDERS",
    "PackagedArtifact",
    "RenderOptions",
    "ServiceConfig",
    "Stage",
    "TopColor",
    "VISUALCUBE_URL",
    "build_image_url",
    "collect_outcomes",
    "convert_to_png",
    "generate_images",
    "mirror_algorithm",
    "mirror_move",
    "package_images",
    "resolve_color_scheme",
    "sanitize_algorithms",
    "sanitize_line",
]
