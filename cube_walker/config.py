"""Configuration dataclasses and YAML loader for the cube walker."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from pathlib import Path
import yaml


VALID_MODES = ('flat', 'cube')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@dataclass
class WalkConfig:
    map_path: Path
    modes: List[str] = field(default_factory=lambda: list(VALID_MODES))

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    show_warp: bool = False
    log_level: str = 'WARNING'
    log_file: Optional[Path] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _parse_modes(modes_raw: Any) -> List[str]:
    """Parse walk modes ('flat', 'cube') from raw YAML data."""
    if isinstance(modes_raw, str):
        modes_raw = [modes_raw]
    modes = []
    for m in modes_raw:
        mode = str(m).lower()
        if mode not in VALID_MODES:
            raise ValueError(f"Unknown walk mode: {m}")
        if mode not in modes:
            modes.append(mode)
    if not modes:
        raise ValueError("At least one walk mode is required")
    return modes


def _parse_log_level(level_raw: Any) -> str:
    level = str(level_raw).upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level_raw}")
    return level


def _resolve(path_raw: str, base: Path) -> Path:
    """Resolve a config-relative path."""
    path = Path(path_raw)
    if not path.is_absolute():
        path = base / path
    return path


def load_config(config_path: Path) -> WalkConfig:
    """Load and validate YAML configuration file."""
    config_path = Path(config_path)
    with open(config_path) as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    base = config_path.parent
    if 'map' not in raw:
        raise ValueError("Configuration is missing the 'map' entry")

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    # Parse logging config (optional)
    logging_raw = raw.get('logging', {})
    log_file = logging_raw.get('file')

    return WalkConfig(
        map_path=_resolve(raw['map'], base),
        modes=_parse_modes(raw.get('modes', list(VALID_MODES))),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        show_warp=raw.get('show_warp', False),
        log_level=_parse_log_level(logging_raw.get('level', 'WARNING')),
        log_file=_resolve(log_file, base) if log_file else None,
        out_dir=_resolve(raw.get('out_dir', 'output'), base)
    )
