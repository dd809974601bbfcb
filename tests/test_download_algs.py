from __future__ import annotations

import json
import zipfile
from io import BytesIO
from pathlib import Path

import httpx
import pytest
from PIL import Image

from algimg.config import ServiceConfig
from algimg.models import Stage, TopColor
from algimg.service import AlgImageService
from scripts import download_algs


def _service(handler) -> AlgImageService:
    return AlgImageService.create(config=ServiceConfig(), transport=httpx.MockTransport(handler))


def _png_response(request: httpx.Request) -> httpx.Response:
    buffer = BytesIO()
    Image.new("RGB", (2, 2)).save(buffer, format="PNG")
    return httpx.Response(200, content=buffer.getvalue())


def test_build_options_from_flags() -> None:
    args = download_algs.parse_args(
        ["--stage", "none", "--top-color", "red", "--mirror", "--no-view", "--size", "512", "--pzl", "4"]
    )
    options = download_algs.build_options(args)
    assert options.stage is Stage.NONE
    assert options.top_color is TopColor.RED
    assert options.mirror is True
    assert options.view is False
    assert options.size == 512
    assert options.pzl == 4


def test_run_writes_archive(tmp_path: Path, capsys) -> None:
    source = tmp_path / "algs.txt"
    source.write_text("R U R' U'\nnonsense\nF2 B2\n", encoding="utf-8")
    out_dir = tmp_path / "out"

    args = download_algs.parse_args([str(source), "--out", str(out_dir)])
    assert download_algs.run(_service(_png_response), args) == 0

    archive_path = out_dir / "alg-imgs.zip"
    with zipfile.ZipFile(archive_path) as archive:
        assert archive.namelist() == ["alg1.png", "alg2.png"]
    output = capsys.readouterr().out
    assert "R U R' U'\nF2 B2\n" in output
    assert "Saved 2/2 images" in output


def test_run_urls_only_skips_download(tmp_path: Path, capsys) -> None:
    source = tmp_path / "algs.txt"
    source.write_text("R\n", encoding="utf-8")

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no network expected")

    args = download_algs.parse_args([str(source), "--urls-only", "--inverse"])
    assert download_algs.run(_service(handler), args) == 0

    output = capsys.readouterr().out
    payload = json.loads(output[output.index("[") :])
    assert payload[0]["alg"] == "R"
    assert "&alg=R" in payload[0]["url"]


def test_run_reports_single_failure(tmp_path: Path) -> None:
    source = tmp_path / "algs.txt"
    source.write_text("R\n", encoding="utf-8")

    args = download_algs.parse_args([str(source), "--out", str(tmp_path / "out")])
    service = _service(lambda request: httpx.Response(500))
    assert download_algs.run(service, args) == 1
    assert not (tmp_path / "out").exists()


def test_run_without_valid_algorithms(tmp_path: Path) -> None:
    source = tmp_path / "algs.txt"
    source.write_text("Q W\n\n", encoding="utf-8")

    args = download_algs.parse_args([str(source)])
    assert download_algs.run(_service(_png_response), args) == 1


def test_zero_workers_is_a_usage_error(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        download_algs.parse_args(["--workers", "0"])
    assert excinfo.value.code == 2
    assert "--workers must be >= 1" in capsys.readouterr().err


def test_positive_workers_are_accepted() -> None:
    assert download_algs.parse_args(["--workers", "3"]).workers == 3
