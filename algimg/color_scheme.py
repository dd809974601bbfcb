from __future__ import annotations

from typing import Dict

from algimg.models import TopColor

# VisualCube "sch" codes, faces listed in U R F D L B order.
COLOR_SCHEMES: Dict[TopColor, str | None] = {
    TopColor.YELLOW: None,
    TopColor.WHITE: "wrgyob",
    TopColor.GREEN: "grybow",
    TopColor.BLUE: "brwgoy",
    TopColor.RED: "rwboyg",
    TopColor.ORANGE: "oybrwg",
}


def resolve_color_scheme(top_color: str | TopColor) -> str | None:
    """Return the scheme override for a top color, or None for the renderer default."""
    return COLOR_SCHEMES[TopColor(top_color)]
