"""Rendering of the generated data modules.

The collector exposes symbol names, sprite paths and symbol content to the
host application through small JavaScript modules and their type
declarations. The modules are rendered from Jinja2 templates shipped with the
package.
"""

import json
import logging
from pathlib import Path
from typing import Any

import jinja2

from svg_icon_sprite.constants import RUNTIME_MODULE, SYMBOL_IMPORT_MODULE
from svg_icon_sprite.utils import path_resolver


class ModuleRenderer:
    """Renderer for the generated data modules."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the renderer.

        Args:
            template_dir: Path to the templates directory. Defaults to the
                templates shipped with the package.
        """
        self.logger = logging.getLogger(__name__)
        self.template_dir = template_dir or path_resolver.get_templates_dir()

        # Generated code is not HTML, values are escaped by the to_js filter
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(self.template_dir),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.jinja_env.filters["to_js"] = self._to_js
        self.jinja_env.globals["runtime_module"] = RUNTIME_MODULE
        self.jinja_env.globals["symbol_import_module"] = SYMBOL_IMPORT_MODULE

    @staticmethod
    def _to_js(value: Any, indent: int | None = None) -> str:
        """Serialize a value as a JavaScript literal.

        Args:
            value: JSON-serializable value.
            indent: Indentation of nested values, None for a single line.

        Returns:
            The JSON text of the value.
        """
        return json.dumps(value, indent=indent, ensure_ascii=False)

    def render(self, template_name: str, **context: Any) -> str:
        """Render a template.

        Args:
            template_name: File name of the template.
            **context: Template variables.

        Returns:
            The rendered module source.
        """
        self.logger.debug(f"Rendering {template_name}")
        return self.jinja_env.get_template(template_name).render(**context)

    def render_runtime_module(
        self,
        sprite_paths: dict[str, str],
        runtime_options: dict[str, Any],
        symbol_names: list[str],
    ) -> str:
        """Render the runtime module with sprite paths, options and symbol names."""
        return self.render(
            "runtime.js.j2",
            sprite_paths=sprite_paths,
            runtime_options=runtime_options,
            symbol_names=symbol_names,
        )

    def render_runtime_types(self, symbol_names: list[str]) -> str:
        """Render the type declarations of the runtime module."""
        return self.render("runtime.d.ts.j2", symbol_names=symbol_names)

    def render_symbol_import_module(
        self,
        inline_symbols: dict[str, dict[str, Any]],
        dev: bool,
        symbol_import_base: str,
    ) -> str:
        """Render the module mapping every symbol name to its content.

        In development every symbol is inlined. Otherwise client builds load
        the per-symbol module on demand and server builds use the inline
        content.

        Args:
            inline_symbols: Symbol content by composite name, in output order.
            dev: Whether the module is rendered for development.
            symbol_import_base: Import path prefix of the per-symbol modules.

        Returns:
            The rendered module source.
        """
        return self.render(
            "symbol_import.js.j2",
            symbols=inline_symbols,
            dev=dev,
            symbol_import_base=symbol_import_base,
        )

    def render_symbol_import_types(self) -> str:
        """Render the type declarations of the symbol import module."""
        return self.render("symbol_import.d.ts.j2")

    def render_symbol_module(self, symbol: dict[str, Any]) -> str:
        """Render the module exporting the content of a single symbol."""
        return self.render("symbol.js.j2", symbol=symbol)
