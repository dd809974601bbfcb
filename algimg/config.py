from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Tuple

from algimg.image_proxy import DEFAULT_FETCH_TIMEOUT, DEFAULT_MAX_IMAGE_BYTES
from algimg.packager import DEFAULT_MAX_WORKERS
from algimg.visualcube import VISUALCUBE_URL

VISUALCUBE_URL_ENV = "ALGIMG_VISUALCUBE_URL"
FETCH_TIMEOUT_ENV = "ALGIMG_FETCH_TIMEOUT"
MAX_WORKERS_ENV = "ALGIMG_MAX_WORKERS"
MAX_IMAGE_BYTES_ENV = "ALGIMG_MAX_IMAGE_BYTES"
CORS_ORIGINS_ENV = "ALGIMG_CORS_ORIGINS"
LOG_LEVEL_ENV = "ALGIMG_LOG_LEVEL"


def _read(environ: Mapping[str, str], name: str) -> str:
    return environ.get(name, "").strip()


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _read(environ, name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _read(environ, name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


@dataclass(frozen=True)
class ServiceConfig:
    visualcube_url: str = VISUALCUBE_URL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServiceConfig":
        env = os.environ if environ is None else environ
        origins = tuple(item.strip() for item in _read(env, CORS_ORIGINS_ENV).split(",") if item.strip())
        return cls(
            visualcube_url=_read(env, VISUALCUBE_URL_ENV) or VISUALCUBE_URL,
            fetch_timeout=_read_float(env, FETCH_TIMEOUT_ENV, DEFAULT_FETCH_TIMEOUT),
            max_workers=_read_int(env, MAX_WORKERS_ENV, DEFAULT_MAX_WORKERS),
            max_image_bytes=_read_int(env, MAX_IMAGE_BYTES_ENV, DEFAULT_MAX_IMAGE_BYTES),
            cors_origins=origins or ("*",),
            log_level=(_read(env, LOG_LEVEL_ENV) or "INFO").upper(),
        )
