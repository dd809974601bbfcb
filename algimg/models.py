from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Tuple

PUZZLE_ORDERS: Tuple[int, ...] = (2, 3, 4, 5, 6, 7)
IMAGE_SIZES: Tuple[int, ...] = (128, 256, 512, 1024)


class Stage(str, Enum):
    NONE = ""
    LL = "ll"
    OLL = "oll"
    COLL = "coll"


class TopColor(str, Enum):
    YELLOW = "yellow"
    WHITE = "white"
    GREEN = "green"
    BLUE = "blue"
    RED = "red"
    ORANGE = "orange"


def _coerce_enum(enum_cls: type[Enum], raw: Any, label: str) -> Any:
    if isinstance(raw, enum_cls):
        return raw
    normalized = "" if raw is None else str(raw).strip().lower()
    for member in enum_cls:
        if member.value == normalized:
            return member
    allowed = ", ".join(repr(member.value) for member in enum_cls)
    raise ValueError(f"{label} must be one of: {allowed}")


@dataclass(frozen=True)
class RenderOptions:
    pzl: int = 3
    view: bool = True
    stage: Stage = Stage.LL
    size: int = 128
    inverse: bool = False
    mirror: bool = False
    top_color: TopColor = TopColor.YELLOW

    def __post_init__(self) -> None:
        if self.pzl not in PUZZLE_ORDERS:
            raise ValueError(f"pzl must be one of {list(PUZZLE_ORDERS)}")
        if self.size not in IMAGE_SIZES:
            raise ValueError(f"size must be one of {list(IMAGE_SIZES)}")
        # frozen: enum coercion has to go through object.__setattr__
        object.__setattr__(self, "stage", _coerce_enum(Stage, self.stage, "stage"))
        object.__setattr__(self, "top_color", _coerce_enum(TopColor, self.top_color, "top_color"))


@dataclass(frozen=True)
class ImageDescriptor:
    alg: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"alg": self.alg, "url": self.url}


@dataclass(frozen=True)
class FetchOutcome:
    index: int
    descriptor: ImageDescriptor
    payload: bytes | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


@dataclass(frozen=True)
class PackagedArtifact:
    filename: str
    media_type: str
    content: bytes
    entries: Tuple[str, ...] = field(default_factory=tuple)
