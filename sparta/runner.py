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

"""Config-by-config pipeline: load, resolve secrets, render.

Each config file is processed independently.  A failure aborts that
config's processing only; the remaining configs are still attempted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from sparta.config import Config, load_config
from sparta.errors import SpartaError
from sparta.functions import FunctionRegistry, default_function_registry
from sparta.secrets import ProviderRegistry, SecretResolver, default_provider_registry
from sparta.templates import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of processing a batch of config files.

    Entries are ``(config file, outcome)`` pairs in processing order; a
    config given twice appears twice.
    """

    rendered: list[tuple[str, list[Path]]] = field(default_factory=list)
    failures: list[tuple[str, SpartaError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def process_config(
    config: Config,
    template_path: str | Path,
    resolver: SecretResolver,
    renderer: TemplateRenderer,
) -> list[Path]:
    """Resolve *config*'s secrets and render every template for it."""
    resolver.resolve(config)
    return renderer.render_path(template_path, config)


def run(
    template_path: str | Path,
    config_files: Iterable[str | Path],
    output_dir: str | Path | None = None,
    *,
    providers: ProviderRegistry | None = None,
    functions: FunctionRegistry | None = None,
    stream: TextIO | None = None,
) -> RunResult:
    """Render *template_path* once per config file.

    Registries default to the built-in providers and functions.
    """
    resolver = SecretResolver(
        providers if providers is not None else default_provider_registry()
    )
    renderer = TemplateRenderer(
        functions if functions is not None else default_function_registry(),
        output_dir=output_dir,
        stream=stream,
    )

    result = RunResult()
    for config_file in config_files:
        key = str(config_file)
        try:
            config = load_config(config_file)
            rendered = process_config(config, template_path, resolver, renderer)
        except SpartaError as exc:
            logger.debug("Config %s failed", key, exc_info=True)
            result.failures.append((key, exc))
        else:
            result.rendered.append((key, rendered))
    return result
