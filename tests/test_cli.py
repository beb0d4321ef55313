"""Tests for the command-line entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest

from catalog_site import cli
from catalog_site.builder import BuildResult


def test_defaults():
    args = cli.parse_args([])
    config = cli.build_config(args)
    assert config.output_root == Path("public")
    assert config.works_root == Path("src/works")
    assert config.download_batch_size == 5
    assert config.manual_archive_url is None


def test_manual_url_defaults_cache_under_source():
    args = cli.parse_args(["--source", "site", "--manual-url", "https://files.example.com/m.zip"])
    config = cli.build_config(args)
    assert config.manual_archive_url == "https://files.example.com/m.zip"
    assert config.manual_archive_cache == Path("site/manual.zip")


def test_explicit_manual_cache():
    args = cli.parse_args(["--manual-url", "https://x/m.zip", "--manual-cache", "/tmp/m.zip"])
    assert cli.build_config(args).manual_archive_cache == Path("/tmp/m.zip")


def test_main_runs_build(tmp_path):
    captured = {}

    async def fake_build(config):
        captured["config"] = config
        return BuildResult(config.output_root, [], [], [], [], 0.1)

    with patch.object(cli, "build_site", fake_build), patch.object(cli.logging, "basicConfig"):
        cli.main(["--source", str(tmp_path / "src"), "--output", str(tmp_path / "out"), "--batch-size", "3"])

    assert captured["config"].output_root == tmp_path / "out"
    assert captured["config"].download_batch_size == 3


def test_main_propagates_failures(tmp_path):
    async def failing_build(config):
        raise FileNotFoundError("type.yaml")

    with patch.object(cli, "build_site", failing_build), patch.object(cli.logging, "basicConfig"):
        with pytest.raises(FileNotFoundError):
            cli.main(["--source", str(tmp_path)])


def test_timeout_default_shared_with_config():
    from catalog_site.config import DEFAULT_HTTP_TIMEOUT, BuildConfig

    config = cli.build_config(cli.parse_args([]))
    assert config.http_timeout == DEFAULT_HTTP_TIMEOUT
    assert BuildConfig.from_roots().http_timeout == DEFAULT_HTTP_TIMEOUT
