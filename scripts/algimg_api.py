#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from algimg.config import ServiceConfig
from algimg.image_proxy import PNG_MEDIA_TYPE, ImageFetchError
from algimg.logging_config import setup_logging
from algimg.models import ImageDescriptor, RenderOptions, Stage, TopColor
from algimg.service import AlgImageService


def _create_service() -> AlgImageService:
    config = ServiceConfig.from_env()
    setup_logging(config.log_level)
    return AlgImageService.create(config=config)


service = _create_service()
app = FastAPI(title="Alg to Img API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(service.config.cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    algs: list[str] | None = None
    pzl: int = 3
    view: bool = True
    stage: Stage = Stage.LL
    size: int = 128
    inverse: bool = False
    mirror: bool = False
    top_color: TopColor = Field(default=TopColor.YELLOW, alias="topColor")


class SanitizeRequest(BaseModel):
    text: str


class ImageItem(BaseModel):
    alg: str
    url: str


class DownloadRequest(BaseModel):
    images: list[ImageItem]


@app.post("/api/generate")
def api_generate(payload: GenerateRequest) -> dict:
    if payload.algs is None:
        raise HTTPException(status_code=400, detail="A list of algorithms is required.")

    try:
        options = RenderOptions(
            pzl=payload.pzl,
            view=payload.view,
            stage=payload.stage,
            size=payload.size,
            inverse=payload.inverse,
            mirror=payload.mirror,
            top_color=payload.top_color,
        )
        images = service.generate(payload.algs, options)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"images": [image.to_dict() for image in images]}


@app.post("/api/sanitize")
def api_sanitize(payload: SanitizeRequest) -> dict:
    algs = service.sanitize(payload.text)
    return {"algs": algs, "text": "\n".join(algs)}


@app.get("/api/image")
def api_image(url: str | None = Query(default=None)) -> Response:
    if not url or not url.strip():
        raise HTTPException(status_code=400, detail="Image URL required")

    try:
        png = service.fetch_image(url)
    except ImageFetchError as exc:
        raise HTTPException(status_code=500, detail="Failed to fetch image") from exc
    return Response(content=png, media_type=PNG_MEDIA_TYPE)


@app.post("/api/download")
def api_download(payload: DownloadRequest) -> Response:
    if not payload.images:
        raise HTTPException(status_code=400, detail="At least one image is required.")

    descriptors = [ImageDescriptor(alg=item.alg, url=item.url) for item in payload.images]
    try:
        artifact = service.package(descriptors)
    except ImageFetchError as exc:
        raise HTTPException(status_code=500, detail="Failed to fetch image") from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )


@app.get("/health")
def health() -> dict:
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("scripts.algimg_api:app", host="127.0.0.1", port=5000, reload=True)
