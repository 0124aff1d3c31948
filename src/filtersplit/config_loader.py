"""
Centralized configuration loading for Filter Split.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from .models.flags import TraverseFlags

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "FILTERSPLIT_CONFIG_DIR"
STRICT_ENV = "FILTERSPLIT_STRICT_CONFIG"
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "config"
SPLITTER_CONFIG_FILE = "splitter.json"


def _resolve_config_dir(config_dir: Optional[str]) -> Path:
    if config_dir:
        return Path(config_dir)
    env_dir = os.getenv(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return DEFAULT_CONFIG_DIR


def _resolve_strict(strict: Optional[bool]) -> bool:
    if strict is not None:
        return strict
    env = os.getenv(STRICT_ENV, "")
    return env.lower() in {"1", "true", "yes", "on"}


def _load_json(path: Path, *, strict: bool) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        if strict:
            raise FileNotFoundError(f"Missing config file: {path}") from exc
        logger.warning("%s not found; using defaults.", path)
        return {}
    except json.JSONDecodeError as exc:
        if strict:
            raise ValueError(f"Malformed config file: {path} ({exc})") from exc
        logger.warning("%s is malformed (%s); using defaults.", path, exc)
        return {}


def _ensure_dict(payload: Any, *, name: str, strict: bool) -> dict[str, Any]:
    if isinstance(payload, dict):
        return payload
    msg = f"Expected {name} to be an object."
    if strict:
        raise ValueError(msg)
    logger.warning(msg)
    return {}


def load_splitter_config(
    *, config_dir: Optional[str] = None, strict: Optional[bool] = None
) -> dict[str, Any]:
    strict_flag = _resolve_strict(strict)
    config_path = _resolve_config_dir(config_dir) / SPLITTER_CONFIG_FILE
    payload = _load_json(config_path, strict=strict_flag)
    return _ensure_dict(payload, name=SPLITTER_CONFIG_FILE, strict=strict_flag)


def load_traverse_flags(
    *, config_dir: Optional[str] = None, strict: Optional[bool] = None
) -> TraverseFlags:
    strict_flag = _resolve_strict(strict)
    config = load_splitter_config(config_dir=config_dir, strict=strict_flag)
    section = config.get("traverse_flags")
    if section is None:
        return TraverseFlags()
    flags = _ensure_dict(section, name=f"{SPLITTER_CONFIG_FILE}.traverse_flags", strict=strict_flag)
    return TraverseFlags.from_mapping(flags)
