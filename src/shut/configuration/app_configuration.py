from __future__ import annotations
from pathlib import Path
import fcntl
from typing import Any, Dict
import yaml

from shut.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_DATABASE_PATH = "./data/settings.sqlite"
DEFAULT_WARNING_LIFETIME_SECONDS = 3.0
DEFAULT_WARNING_MESSAGE = "{mention} SHUT!"


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    The class caches the contents of ``./config/app_config.yml`` and exposes
    typed shortcuts for the values the bot needs. Secrets such as the
    Discord token are read from the environment, never from this file.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found, using defaults.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.error("[APP CONFIGURATION] Config %s is not a mapping, using defaults.", self.config_path)
            return {}
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name, {})
        return section if isinstance(section, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Re-read the YAML file and replace the in-memory cache.

        Returns the raw mapping that was loaded (an empty dict on error).
        """
        self._data = self.load_from_disk()
        return self._data

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def database_path(self) -> Path:
        """Location of the SQLite file holding the enforced channels."""
        value = self._section("database").get("path") or DEFAULT_DATABASE_PATH
        return Path(str(value)).resolve()

    @property
    def warning_lifetime_seconds(self) -> float:
        """Seconds a warning reply stays visible before it is deleted.

        Applies to every channel. Negative or non-numeric values fall back
        to the default of 3 seconds.
        """
        value = self._section("moderation").get("warning_lifetime_seconds", DEFAULT_WARNING_LIFETIME_SECONDS)
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            logger.warning("[APP CONFIGURATION] Invalid warning_lifetime_seconds %r, using default", value)
            return DEFAULT_WARNING_LIFETIME_SECONDS
        if seconds < 0:
            logger.warning("[APP CONFIGURATION] Negative warning_lifetime_seconds %r, using default", value)
            return DEFAULT_WARNING_LIFETIME_SECONDS
        return seconds

    @property
    def warning_message(self) -> str:
        """Template for the warning reply; ``{mention}`` is the author's mention."""
        value = self._section("moderation").get("warning_message") or DEFAULT_WARNING_MESSAGE
        return str(value)


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
