"""Template tree rendering with ``{{ name }}`` substitution."""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping

from .exceptions import UnresolvedPlaceholder

__all__ = [
    "IGNORED_FILE_NAMES",
    "TEMPLATE_SUFFIX",
    "TemplateRenderer",
    "render_string",
]

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tmpl"
IGNORED_FILE_NAMES = frozenset({".DS_Store"})

_PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def render_string(template: str, context: Mapping[str, str]) -> str:
    """Replace every ``{{ key }}`` in ``template`` with ``context[key]``.

    Raises:
        UnresolvedPlaceholder: If a key is missing or maps to an empty value.
    """

    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        value = context.get(key)
        if not value:
            raise UnresolvedPlaceholder(key)
        return value

    return _PLACEHOLDER_PATTERN.sub(replace, template)


def _mkdir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write_file(path: Path, contents: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(contents)


@dataclass
class TemplateRenderer:
    """Mirror a template directory into an output directory.

    Files ending in ``.tmpl`` are rendered and written without the suffix,
    ``.DS_Store`` files are skipped, and everything else is copied as-is.
    The filesystem writes are pluggable so callers can observe or redirect
    them.
    """

    mkdir: Callable[[Path], None] = _mkdir
    copy_file: Callable[[Path, Path], object] = shutil.copyfile
    write_file: Callable[[Path, str], None] = _write_file

    def render(
        self,
        template_root: str | Path,
        output_root: str | Path,
        context: Mapping[str, str],
    ) -> list[Path]:
        """Render ``template_root`` into ``output_root``.

        Entries are visited in sorted order. A file that fails to render is
        never written, but files written before the failure are left in
        place.

        Returns:
            Paths of the files written, in the order they were written.
        """
        written: list[Path] = []
        self._render_entry(Path(template_root), Path(output_root), context, written)
        return written

    def _render_entry(
        self,
        template_path: Path,
        output_path: Path,
        context: Mapping[str, str],
        written: list[Path],
    ) -> None:
        if template_path.is_dir():
            self.mkdir(output_path)
            for entry in sorted(template_path.iterdir(), key=lambda p: p.name):
                self._render_entry(entry, output_path / entry.name, context, written)
            return

        if template_path.name in IGNORED_FILE_NAMES:
            return

        if template_path.name.endswith(TEMPLATE_SUFFIX):
            output_path = output_path.with_name(output_path.name[: -len(TEMPLATE_SUFFIX)])
            with template_path.open(encoding="utf-8", newline="") as f:
                contents = render_string(f.read(), context)
            self.write_file(output_path, contents)
        else:
            self.copy_file(template_path, output_path)

        logger.debug("Wrote %s", output_path)
        written.append(output_path)
