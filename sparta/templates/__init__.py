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

"""Jinja2 template rendering for config files.

Usage::

    from sparta.functions import default_function_registry
    from sparta.templates import TemplateRenderer

    renderer = TemplateRenderer(default_function_registry(), output_dir="out")
    renderer.render_path("manifests/", config)
"""

from sparta.templates.engine import TEMPLATE_EXTENSIONS, TemplateRenderer, iter_template_files

__all__ = ["TEMPLATE_EXTENSIONS", "TemplateRenderer", "iter_template_files"]
