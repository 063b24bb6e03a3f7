from __future__ import annotations

from pathlib import Path

import yaml

CONFIG_PATH = Path("config/config.yaml")

TREND_DEFAULTS = {
    "min_r_squared": 0.0,
    "pin_domain_to_unit": True,
}


def load_cfg(path: Path | str = CONFIG_PATH) -> dict:
    """Read the YAML config; a missing or unreadable file is an empty config."""
    try:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}


def trend_settings(cfg: dict) -> dict:
    out = dict(TREND_DEFAULTS)
    out.update({k: v for k, v in (cfg.get("trend") or {}).items() if k in TREND_DEFAULTS})
    out["min_r_squared"] = float(out["min_r_squared"])
    out["pin_domain_to_unit"] = bool(out["pin_domain_to_unit"])
    return out
