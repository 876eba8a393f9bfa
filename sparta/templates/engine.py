# sparta — template renderer with secret-store integration
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Jinja2 rendering of template files against a resolved config.

Output goes to a stream (stdout by default) or, when an output directory
is configured, to ``<output_dir>/<config name>/<template file name>``.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from jinja2 import BaseLoader, Environment, TemplateNotFound, TemplateSyntaxError

from sparta.config import Config
from sparta.errors import (
    OutputIOError,
    RenderAbort,
    TemplateExecError,
    TemplateLoadError,
    TemplateParseError,
)
from sparta.functions import FunctionRegistry

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSIONS = (".yaml", ".yml")


class _PathLoader(BaseLoader):
    """Jinja2 loader that treats the template name as a filesystem path."""

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, callable]:
        path = Path(template)
        if not path.is_file():
            raise TemplateNotFound(template)
        source = path.read_text(encoding="utf-8")
        mtime = path.stat().st_mtime
        return source, str(path), lambda: path.stat().st_mtime == mtime


def _raise_walk_error(error: OSError) -> None:
    raise error


def iter_template_files(path: Path) -> list[Path]:
    """Return the template files under *path* in lexical walk order.

    A file path is returned as-is; a directory is walked recursively for
    ``.yaml`` / ``.yml`` files.
    """
    if not path.is_dir():
        return [path]

    files: list[Path] = []
    for root, dirs, names in os.walk(path, onerror=_raise_walk_error):
        dirs.sort()
        for name in sorted(names):
            if os.path.splitext(name)[1] in TEMPLATE_EXTENSIONS:
                files.append(Path(root) / name)
    return files


class TemplateRenderer:
    """Render template files with the functions of a :class:`FunctionRegistry`.

    Args:
        functions: Registry whose entries are exposed as Jinja globals
            and filters.
        output_dir: Root output directory; ``None`` writes to *stream*.
        stream: Output stream when no directory is set (``sys.stdout``
            at render time if omitted).
    """

    def __init__(
        self,
        functions: FunctionRegistry,
        output_dir: str | Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.functions = functions
        self.output_dir = Path(output_dir) if output_dir else None
        self._stream = stream

    def _environment(self) -> Environment:
        env = Environment(
            loader=_PathLoader(),
            keep_trailing_newline=True,
            autoescape=False,  # Output is YAML/plain text, not HTML
            cache_size=0,
        )
        snapshot = self.functions.snapshot()
        env.globals.update(snapshot)
        env.filters.update(snapshot)
        return env

    def render_path(self, path: str | Path, config: Config) -> list[Path]:
        """Render a template file, or every template file under a directory.

        Returns the rendered source paths in processing order.
        """
        path = Path(path)
        try:
            files = iter_template_files(path)
        except OSError as exc:
            raise TemplateLoadError(getattr(exc, "filename", None) or path, str(exc)) from exc

        for file in files:
            self.render_file(file, config)
        return files

    def render_string(self, path: str | Path, config: Config) -> str:
        """Parse and execute the template at *path*, returning the output."""
        path = Path(path)
        env = self._environment()
        try:
            template = env.get_template(str(path))
        except TemplateSyntaxError as exc:
            raise TemplateParseError(path, exc.message or str(exc), exc.lineno) from exc
        except TemplateNotFound as exc:
            raise TemplateLoadError(path, "no such file") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateLoadError(path, str(exc)) from exc

        try:
            return template.render(config.values)
        except RenderAbort as exc:
            raise TemplateExecError(path, str(exc)) from exc
        except Exception as exc:
            raise TemplateExecError(path, f"{type(exc).__name__}: {exc}") from exc

    def render_file(self, path: str | Path, config: Config) -> Path | None:
        """Render one template file to the configured sink.

        Returns the written output path, or ``None`` when writing to a stream.
        """
        path = Path(path)
        output = self.render_string(path, config)

        if self.output_dir is None:
            stream = self._stream if self._stream is not None else sys.stdout
            stream.write(output)
            stream.flush()
            return None

        out_path = self.output_dir / config.name / path.name
        logger.info("Processing template: %s -> %s", path, out_path)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(output, encoding="utf-8")
        except OSError as exc:
            raise OutputIOError(out_path, str(exc)) from exc
        return out_path
