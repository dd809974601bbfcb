from __future__ import annotations

from urllib.parse import quote

from algimg.color_scheme import resolve_color_scheme
from algimg.models import RenderOptions, Stage

VISUALCUBE_URL = "https://visualcube.api.cubing.net/visualcube.php"
IMAGE_FORMAT = "svg"

# Same characters encodeURIComponent leaves alone (quote always keeps "_.-~").
_URI_COMPONENT_SAFE = "!*'()"

# Marks "no scheme given": resolve it from options.top_color.
FROM_OPTIONS = object()


def encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def algorithm_param(inverse: bool) -> str:
    # "case" renders the state the algorithm solves, "alg" the state it produces.
    return "alg" if inverse else "case"


def build_query(
    algorithm: str,
    options: RenderOptions,
    scheme: str | None | object = FROM_OPTIONS,
) -> list[tuple[str, str]]:
    if scheme is FROM_OPTIONS:
        scheme = resolve_color_scheme(options.top_color)

    params: list[tuple[str, str]] = [
        ("fmt", IMAGE_FORMAT),
        ("size", str(options.size)),
        ("pzl", str(options.pzl)),
        (algorithm_param(options.inverse), algorithm),
    ]

    if options.view:
        params.append(("view", "plan"))
    if options.stage != Stage.NONE:
        params.append(("stage", options.stage.value))
    if scheme:
        params.append(("sch", str(scheme)))

    return params


def build_image_url(
    algorithm: str,
    options: RenderOptions,
    scheme: str | None | object = FROM_OPTIONS,
    base_url: str = VISUALCUBE_URL,
) -> str:
    """Build the VisualCube URL for one algorithm.

    ``scheme`` defaults to the code for ``options.top_color``. Callers that
    build many URLs can resolve it once and pass it in; ``None`` means the
    renderer default.
    """
    query = "&".join(f"{key}={encode_component(value)}" for key, value in build_query(algorithm, options, scheme))
    return f"{base_url}?{query}"
