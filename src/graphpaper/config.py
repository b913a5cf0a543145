"""Chart description files and render settings.

A chart description file holds one ``ChartSpec`` as JSON, YAML or TOML::

    type: bar
    title: Spoons per day
    x: day
    y: spoons
    data:
      - {day: Mon, spoons: 6}
      - {day: Tue, spoons: 0}
    attrs:
      barColor: steelblue
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

try:
    import tomllib
except ImportError:  # Python < 3.11
    import tomli as tomllib  # type: ignore[no-redef]

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 400
DEFAULT_TIMEOUT = 30.0

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


@dataclass
class RenderSettings:
    """Canvas size and network timeout for command-line rendering."""

    width: int = field(default_factory=lambda: int(os.getenv("GRAPHPAPER_WIDTH", DEFAULT_WIDTH)))
    height: int = field(default_factory=lambda: int(os.getenv("GRAPHPAPER_HEIGHT", DEFAULT_HEIGHT)))
    timeout: float = field(default_factory=lambda: float(os.getenv("GRAPHPAPER_TIMEOUT", DEFAULT_TIMEOUT)))

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")


def load_chart_file(path_str: str | Path) -> dict[str, Any]:
    """Read a chart description from a ``.json``, ``.yaml``/``.yml`` or ``.toml`` file.

    Files with any other suffix are tried as JSON, then YAML.
    """
    path = Path(path_str).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(f"Chart file not found: {path}")

    raw = path.read_text(encoding="utf-8")

    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(raw) or {}
    elif path.suffix == ".json":
        data = json.loads(raw)
    elif path.suffix == ".toml":
        data = tomllib.loads(raw)
    else:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = yaml.safe_load(raw) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Chart file {path} must contain a mapping, got {type(data).__name__}")
    return data


def parse_attr_overrides(pairs: tuple[str, ...] | list[str]) -> dict[str, Any]:
    """Turn ``["barColor=blue", "barWidth=0.5"]`` into attribute values.

    Values are read as YAML scalars, so numbers and booleans keep their type.
    """
    overrides: dict[str, Any] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected NAME=VALUE, got {pair!r}")
        overrides[name.strip()] = yaml.safe_load(value) if value else ""
    return overrides
