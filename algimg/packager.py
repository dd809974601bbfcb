from __future__ import annotations

import logging
import zipfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from io import BytesIO
from typing import Callable, Sequence

from algimg.image_proxy import PNG_MEDIA_TYPE, ImageFetchError
from algimg.models import FetchOutcome, ImageDescriptor, PackagedArtifact

logger = logging.getLogger(__name__)

Fetch = Callable[[str], bytes]

SINGLE_IMAGE_NAME = "alg.png"
ARCHIVE_NAME = "alg-imgs.zip"
ZIP_MEDIA_TYPE = "application/zip"
DEFAULT_MAX_WORKERS = 4


def archive_entry_name(index: int) -> str:
    return f"alg{index + 1}.png"


def _fetch_one(index: int, descriptor: ImageDescriptor, fetch: Fetch) -> FetchOutcome:
    try:
        payload = fetch(descriptor.url)
    except ImageFetchError as exc:
        return FetchOutcome(index=index, descriptor=descriptor, error=str(exc))
    return FetchOutcome(index=index, descriptor=descriptor, payload=payload)


def collect_outcomes(
    descriptors: Sequence[ImageDescriptor],
    fetch: Fetch,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[FetchOutcome]:
    """Fetch every descriptor concurrently; results come back in input order."""
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1")
    if not descriptors:
        return []

    outcomes: list[FetchOutcome | None] = [None] * len(descriptors)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(descriptors))) as executor:
        futures = [
            executor.submit(_fetch_one, index, descriptor, fetch)
            for index, descriptor in enumerate(descriptors)
        ]
        for future in as_completed(futures):
            outcome = future.result()
            outcomes[outcome.index] = outcome
            if not outcome.ok:
                logger.warning("Skipping image %d (%s): %s", outcome.index + 1, outcome.descriptor.alg, outcome.error)

    return [outcome for outcome in outcomes if outcome is not None]


def build_archive(outcomes: Sequence[FetchOutcome]) -> tuple[bytes, tuple[str, ...]]:
    buffer = BytesIO()
    entries: list[str] = []
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for outcome in sorted(outcomes, key=lambda item: item.index):
            if outcome.payload is None:
                continue
            name = archive_entry_name(outcome.index)
            archive.writestr(name, outcome.payload)
            entries.append(name)
    return buffer.getvalue(), tuple(entries)


def package_images(
    descriptors: Sequence[ImageDescriptor],
    fetch: Fetch,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> PackagedArtifact | None:
    """Turn a batch of descriptors into one downloadable artifact.

    Nothing to do for an empty batch. A single image is returned as
    ``alg.png`` and its fetch error propagates. Larger batches always
    produce ``alg-imgs.zip``; images that fail are left out, so the
    archive may end up empty.
    """
    if not descriptors:
        return None

    if len(descriptors) == 1:
        payload = fetch(descriptors[0].url)
        return PackagedArtifact(
            filename=SINGLE_IMAGE_NAME,
            media_type=PNG_MEDIA_TYPE,
            content=payload,
            entries=(SINGLE_IMAGE_NAME,),
        )

    outcomes = collect_outcomes(descriptors, fetch, max_workers=max_workers)
    content, entries = build_archive(outcomes)
    logger.info("Packaged %d of %d images into %s", len(entries), len(descriptors), ARCHIVE_NAME)
    return PackagedArtifact(
        filename=ARCHIVE_NAME,
        media_type=ZIP_MEDIA_TYPE,
        content=content,
        entries=entries,
    )
