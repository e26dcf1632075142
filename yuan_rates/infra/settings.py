from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any


class SettingsLoader:
    """Singleton settings provider.

    Reads pyproject.toml [tool.yuan_rates] if present.
    Provides defaults otherwise.
    """

    _instance: "SettingsLoader | None" = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):  # noqa: D401 - singleton boilerplate
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True
        self._root = Path(__file__).resolve().parents[2]
        self._config: dict[str, Any] = {}
        self.reload()

    def _defaults(self) -> dict[str, Any]:
        root = self._root
        return {
            "logs_dir": str(root / "logs"),
            "log_file": str(root / "logs" / "yuan_rates.log"),
            "log_level": "INFO",
            # console shares the terminal with the "Money: " prompt
            "console_log_level": "WARNING",
            "log_rotation_bytes": 1_048_576,  # 1MB
            "log_backup_count": 5,
            "cache_file": None,
        }

    def reload(self) -> None:
        cfg = self._defaults()
        pyproject = self._root / "pyproject.toml"
        if pyproject.exists():
            try:
                data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                section = data.get("tool", {}).get("yuan_rates", {})  # type: ignore[assignment]
                if isinstance(section, dict):
                    for k, v in section.items():
                        cfg[k] = v
            except Exception:
                # Ignore malformed config; stick to defaults
                pass
        self._config = cfg

    def get(self, key: str, default: Any | None = None) -> Any:
        value = self._config.get(key, default)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Override a setting for the current process (CLI flags)."""
        self._config[key] = value
