"""Configuration loader that keeps all runtime constants centralized."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

try:
    import yaml
except ImportError as exc:  # pragma: no cover - library is optional until runtime
    raise RuntimeError("PyYAML is required to load the application configuration") from exc


CONFIG_PATH = Path(__file__).resolve().parent / "app_config.yaml"
BACKEND_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class AppConfig:
    """Strongly-typed wrapper over the raw YAML document."""

    raw: Dict[str, Any]

    @property
    def version(self) -> str:
        return str(self.raw.get("version", "v1"))

    @property
    def database(self) -> Dict[str, Any]:
        return self.raw.get("database", {})

    @property
    def reports(self) -> Dict[str, Any]:
        return self.raw.get("reports", {})

    @property
    def mailer(self) -> Dict[str, Any]:
        return self.raw.get("mailer", {})

    @property
    def logging(self) -> Dict[str, Any]:
        return self.raw.get("logging", {})

    @property
    def database_url(self) -> str:
        url = (self.database or {}).get("url")
        if url:
            return str(url)
        db_file = (self.database or {}).get("file", "human_essentials.db")
        return f"sqlite:///{BACKEND_DIR / db_file}"


@lru_cache(maxsize=1)
def get_settings(path: Path | None = None) -> AppConfig:
    """Load configuration once per process."""

    env_path = os.environ.get("APP_CONFIG")
    config_path = path or (Path(env_path) if env_path else CONFIG_PATH)
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):  # pragma: no cover - invalid file guard
        raise ValueError("Configuration file must define a mapping at the top level.")
    return AppConfig(raw=data)
