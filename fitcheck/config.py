from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .validation import MAX_UPLOAD_BYTES


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class TrackerConfig:
    weight_interval_days: int = 7
    photo_interval_days: int = 28
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    data_root: Path = field(default_factory=lambda: _repo_root() / "data")

    @staticmethod
    def from_dict(data: Dict[str, Any], base_dir: Optional[Path] = None) -> "TrackerConfig":
        defaults = TrackerConfig()
        data_root = defaults.data_root
        if data.get("data_root"):
            data_root = Path(str(data["data_root"])).expanduser()
            # Relative roots are taken from the directory holding the config file.
            if not data_root.is_absolute():
                data_root = ((base_dir or _repo_root()) / data_root).resolve()
        return TrackerConfig(
            weight_interval_days=int(data.get("weight_interval_days", defaults.weight_interval_days)),
            photo_interval_days=int(data.get("photo_interval_days", defaults.photo_interval_days)),
            max_upload_bytes=int(data.get("max_upload_bytes", defaults.max_upload_bytes)),
            data_root=data_root,
        )


def default_config_path() -> Path:
    return _repo_root() / "config" / "tracker.yaml"


def load_tracker_config(path: Optional[Path] = None) -> TrackerConfig:
    cfg_path = Path(path) if path is not None else default_config_path()
    if not cfg_path.exists():
        return TrackerConfig()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return TrackerConfig()
    if not isinstance(data, dict):
        return TrackerConfig()
    try:
        return TrackerConfig.from_dict(data, base_dir=cfg_path.resolve().parent)
    except (TypeError, ValueError):
        return TrackerConfig()
