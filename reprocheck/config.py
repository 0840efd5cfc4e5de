from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os
import json
import yaml

OUTPUT_FORMATS = ("json", "markdown")


@dataclass
class RunConfig:
    extraction: str
    out: Optional[str] = None
    format: str = "json"
    strict: bool = False


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class RuntimeSettings:
    log_level: str = field(default_factory=lambda: os.getenv("REPROCHECK_LOG_LEVEL", "WARNING").upper())
    json_indent: int = field(default_factory=lambda: _env_int("REPROCHECK_JSON_INDENT", 2))


def load_run_config(path: str | Path) -> RunConfig:
    p = Path(path)
    data = yaml.safe_load(p.read_text()) if p.suffix in {".yaml", ".yml"} else json.loads(p.read_text())
    cfg = RunConfig(**data)
    if cfg.format in (None, ""):
        cfg.format = "json"
    if not isinstance(cfg.format, str):
        raise ValueError(f"format must be a string, got {type(cfg.format).__name__}")
    if not isinstance(cfg.strict, bool):
        raise ValueError(f"strict must be true or false, got {cfg.strict!r}")
    cfg.format = cfg.format.lower()
    if cfg.format not in OUTPUT_FORMATS:
        raise ValueError(f"format must be one of {', '.join(OUTPUT_FORMATS)}, got '{cfg.format}'")
    if os.getenv("REPROCHECK_STRICT") == "1":
        cfg.strict = True
    # Relative paths resolve against the config file's directory
    cfg.extraction = str(_resolve(p, cfg.extraction))
    if cfg.out:
        cfg.out = str(_resolve(p, cfg.out))
    return cfg


def load_runtime_settings() -> RuntimeSettings:
    """Return runtime settings (log level, JSON indent) from the environment."""
    return RuntimeSettings()


def _resolve(config_path: Path, value: str) -> Path:
    candidate = Path(value)
    if candidate.is_absolute():
        return candidate
    return config_path.parent / candidate
