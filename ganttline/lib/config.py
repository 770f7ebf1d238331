"""
Chart configuration.

Loads gantt.yaml for the status palette and display settings. If no
config file exists, returns defaults.

Example gantt.yaml:

    status_colors:
      blocked: "#FF0000"
    tooltip_offset: 12
    no_project_label: Unassigned
    bar_width: 80

Only keys present in the file override the defaults. Palette entries
for statuses outside the known set are ignored.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ganttline.lib.models import NO_PROJECT, VALID_STATUSES

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GANTT_CONFIG"

DEFAULT_STATUS_COLORS = {
    "completed": "#00C875",
    "in_progress": "#0073EA",
    "blocked": "#E44258",
    "pending": "#FDAB3D",
}
FALLBACK_COLOR = "#E5E7EB"

DEFAULT_TOOLTIP_OFFSET = 10
DEFAULT_BAR_WIDTH = 60
MIN_BAR_WIDTH = 8

HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$')


@dataclass
class GanttConfig:
    """Display configuration from gantt.yaml."""
    status_colors: dict[str, str] = field(default_factory=lambda: DEFAULT_STATUS_COLORS.copy())
    tooltip_offset: int = DEFAULT_TOOLTIP_OFFSET
    no_project_label: str = NO_PROJECT
    bar_width: int = DEFAULT_BAR_WIDTH

    def color_for(self, status: str) -> str:
        """Hex color for a status, fallback grey for unknown ones."""
        return self.status_colors.get(status, FALLBACK_COLOR)


def resolve_config_path(path: Optional[Path]) -> Optional[Path]:
    """Explicit path wins, else $GANTT_CONFIG, else None."""
    if path is not None:
        return path
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else None


def load_gantt_config(path: Optional[Path]) -> GanttConfig:
    """Load gantt.yaml and return GanttConfig.

    If path is None or the file doesn't exist, returns defaults.
    """
    if path is None or not path.exists():
        return GanttConfig()

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse {path}: {e}")
        return GanttConfig()

    if not data:
        return GanttConfig()
    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path}: expected a mapping at top level")
        return GanttConfig()

    config = GanttConfig()

    colors = data.get("status_colors") or {}
    if not isinstance(colors, dict):
        logger.warning(f"Ignoring status_colors in {path}: expected a mapping")
        colors = {}
    for status, color in colors.items():
        if status not in VALID_STATUSES:
            logger.warning(f"Unknown status '{status}' in {path}, ignoring")
            continue
        if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
            logger.warning(f"Invalid color {color!r} for '{status}' in {path}, keeping default")
            continue
        config.status_colors[status] = color.upper()

    if "tooltip_offset" in data:
        config.tooltip_offset = _int_setting(data, "tooltip_offset", DEFAULT_TOOLTIP_OFFSET, path)
    if "bar_width" in data:
        width = _int_setting(data, "bar_width", DEFAULT_BAR_WIDTH, path)
        config.bar_width = max(width, MIN_BAR_WIDTH)
    if data.get("no_project_label"):
        config.no_project_label = str(data["no_project_label"])

    return config


def _int_setting(data: dict, key: str, default: int, path: Path) -> int:
    try:
        return int(data[key])
    except (TypeError, ValueError):
        logger.warning(f"Invalid {key} {data[key]!r} in {path}, using {default}")
        return default
