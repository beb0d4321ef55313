"""Page rendering through Jinja2 templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import Work

logger = logging.getLogger("catalog_site")


def create_environment(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(),
    )


def render_page(env: Environment, name: str, context: Mapping[str, Any]) -> str:
    return env.get_template(name).render(**context)


def write_pages(
    env: Environment,
    site_root: Path,
    works: List[Work],
    types: List[str],
    pages: Iterable[Tuple[str, str]],
) -> List[Path]:
    """Render each ``(template, output)`` pair with the works and type vocabulary."""
    written: List[Path] = []
    context = {"works": works, "types": types}
    for template_name, output_name in pages:
        logger.info("Building %s", output_name)
        html = render_page(env, template_name, context)
        destination = site_root / output_name
        destination.write_text(html, encoding="utf-8")
        written.append(destination)
    return written
