"""Shared test fixtures for catalog-site."""

import asyncio
import io
import zipfile
from pathlib import Path

import pytest
import requests
import yaml

from catalog_site.config import BuildConfig

FIXTURES = Path(__file__).parent / "fixtures"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

INDEX_TEMPLATE = """<!doctype html>
<ul>
{%- for work in works %}
<li data-code="{{ work.code }}"><img src="{{ work.cover }}" alt="{{ work.title }}">
{%- for item in work.items %}<a href="{{ item.links.ja }}">ja</a><a href="{{ item.links.zh }}">zh</a>{% endfor %}
<span class="tags">{{ work.tags.type | join(",") }}</span></li>
{%- endfor %}
</ul>
<p class="types">{{ types | join(",") }}</p>
"""

NOT_FOUND_TEMPLATE = "<!doctype html><h1>Not found</h1><p>{{ works | length }} works</p>\n"


class FakeFetcher:
    """In-memory stand-in for HttpFetcher that records every request."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    async def fetch_bytes(self, url):
        self.calls.append(url)
        await asyncio.sleep(0)
        if url not in self.responses:
            raise requests.HTTPError(f"404 Client Error for url: {url}")
        return self.responses[url]


def make_zip(files):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def work_record(order, code, cover, items=None, **extra):
    record = {
        "order": order,
        "code": code,
        "title": f"Title {code}",
        "suffix": "",
        "cover": cover,
        "hidden": False,
        "tags": {"era": "windows", "state": "released"},
        "items": items
        if items is not None
        else [{"title": f"{code} item", "type": ["game"], "links": {"wiki": code, "ja": True, "zh": True}}],
    }
    record.update(extra)
    return record


def write_source_tree(root, works, types=None, downloads=None, manuals=None):
    """Lay out a complete source directory under ``root``."""
    for name, record in works.items():
        write_yaml(root / "works" / name, record)
    write_yaml(root / "data" / "type.yaml", types if types is not None else ["game", "music"])
    write_yaml(root / "data" / "download.yaml", downloads if downloads is not None else [])

    static = root / "static"
    (static / "css").mkdir(parents=True, exist_ok=True)
    (static / "css" / "site.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (static / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")

    templates = root / "templates"
    templates.mkdir(parents=True, exist_ok=True)
    (templates / "index.html").write_text(INDEX_TEMPLATE, encoding="utf-8")
    (templates / "404.html").write_text(NOT_FOUND_TEMPLATE, encoding="utf-8")

    manual_dir = root / "manual"
    manual_dir.mkdir(parents=True, exist_ok=True)
    for name, files in (manuals or {}).items():
        (manual_dir / name).write_bytes(make_zip(files))
    return root


@pytest.fixture
def translation_html():
    return (FIXTURES / "translation.html").read_bytes()


@pytest.fixture
def source_root(tmp_path):
    return tmp_path / "src"


@pytest.fixture
def config(tmp_path, source_root):
    return BuildConfig.from_roots(source_root, tmp_path / "public")
