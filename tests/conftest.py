"""Common fixtures for testing the SVG icon sprite builder."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from svg_icon_sprite.models.sprite import BuildContext

ICON_MARKUP = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" width="24" height="24">'
    '<path d="M0 0h24v24H0z" fill="red"/>'
    "</svg>"
)


@pytest.fixture()
def icon_markup() -> str:
    """Get the markup of a simple icon."""
    return ICON_MARKUP


@pytest.fixture()
def write_svg(tmp_path: Path) -> Callable[..., str]:
    """Get a function writing an SVG file below the temporary directory."""

    def write(relative_path: str, markup: str = ICON_MARKUP) -> str:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markup, encoding="utf-8")
        return str(path)

    return write


@pytest.fixture()
def build_context(tmp_path: Path) -> BuildContext:
    """Create a build context rooted in the temporary directory."""
    return BuildContext(root_dir=str(tmp_path), src_dir=str(tmp_path))


@pytest.fixture()
def dev_context(tmp_path: Path) -> BuildContext:
    """Create a development build context rooted in the temporary directory."""
    return BuildContext(dev=True, root_dir=str(tmp_path), src_dir=str(tmp_path))


@pytest.fixture()
def test_config_data(tmp_path: Path) -> dict[str, Any]:
    """Get configuration data as it would be read from YAML."""
    return {
        "root_dir": str(tmp_path),
        "src_dir": "app",
        "dev": False,
        "aria_hidden": True,
        "sprites": {
            "special": {
                "import_patterns": ["~/assets/special/*.svg"],
                "process_sprite_symbol": [
                    "remove_sizes",
                    {"name": "remove_tags", "options": {"tags": ["title"]}},
                ],
            }
        },
        "logging": {"level": "DEBUG", "format": "console"},
    }


@pytest.fixture()
def test_config_path(tmp_path: Path, test_config_data: dict[str, Any]) -> Path:
    """Write the configuration data to a YAML file."""
    path = tmp_path / "sprites.yaml"
    path.write_text(yaml.safe_dump(test_config_data), encoding="utf-8")
    return path
