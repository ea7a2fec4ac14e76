"""
SLA Configuration Loading
=========================

YAML policy loading for the SLA engine:
- Parse and validate policy files into immutable SLASettings snapshots
- Swap snapshots atomically on reload, keeping the last good one on failure
- Optional watchdog observer for hot reload
"""

import threading
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from helpdesk_sla.config import Settings, get_settings
from helpdesk_sla.core.exceptions import InvalidPolicyException
from helpdesk_sla.shared.infrastructure.logging import get_logger, setup_logging
from helpdesk_sla.sla.application.services import ISLAConfigProvider, SLAService
from helpdesk_sla.sla.domain.value_objects import DEFAULT_SLA_SETTINGS, SLASettings

logger = get_logger(__name__)


def parse_sla_settings(data: Any, default_risk_threshold: Optional[float] = None) -> SLASettings:
    """
    Validate a decoded policy document.

    Raises:
        InvalidPolicyException: the document does not describe a usable policy
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidPolicyException(
            "SLA configuration must be a mapping",
            {"type": type(data).__name__}
        )

    if default_risk_threshold is not None and "risk_threshold" not in data:
        data = {**data, "risk_threshold": default_risk_threshold}

    try:
        return SLASettings.model_validate(data)
    except ValidationError as e:
        raise InvalidPolicyException(
            f"Invalid SLA configuration: {e.error_count()} error(s)",
            {"errors": e.errors(include_url=False)}
        ) from e


class ConfigFileHandler(FileSystemEventHandler):
    """Watchdog event handler for SLA config file changes."""

    def __init__(self, config_manager: "SLAConfigManager", config_path: Path):
        self.config_manager = config_manager
        self.config_path = config_path
        super().__init__()

    def on_modified(self, event):
        """Handle file modification event."""
        if event.is_directory:
            return
        if Path(event.src_path).resolve() == self.config_path.resolve():
            logger.info(f"Config file changed: {event.src_path}")
            self.config_manager.reload()


class SLAConfigManager(ISLAConfigProvider):
    """
    Thread-safe SLA configuration manager with hot-reload support.

    Readers always get a complete snapshot; a reload builds the new
    snapshot first and then swaps it in under the lock.
    """

    def __init__(self, default_risk_threshold: Optional[float] = None):
        self._config: Optional[SLASettings] = None
        self._lock = threading.Lock()
        self._path: Optional[Path] = None
        self._observer = None
        self._default_risk_threshold = default_risk_threshold

    def load(self, path: Path) -> SLASettings:
        """Initial configuration load."""
        self._path = Path(path)
        config = self._load_from_file(self._path)
        with self._lock:
            self._config = config
        return config

    def _load_from_file(self, path: Path) -> SLASettings:
        """Load and parse YAML config file."""
        if not path.exists():
            logger.warning(f"SLA config file not found: {path}, using defaults")
            if self._default_risk_threshold is None:
                return DEFAULT_SLA_SETTINGS
            return DEFAULT_SLA_SETTINGS.model_copy(
                update={"risk_threshold": self._default_risk_threshold}
            )

        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidPolicyException(
                    f"SLA config file is not valid YAML: {path}",
                    {"path": str(path), "error": str(e)}
                ) from e

        return parse_sla_settings(data, self._default_risk_threshold)

    def reload(self) -> bool:
        """
        Reload configuration from file.

        Returns:
            True if the new snapshot is in use, False if the previous one was kept
        """
        if self._path is None:
            return False

        try:
            new_config = self._load_from_file(self._path)
        except Exception as e:
            logger.error(
                "Failed to reload SLA config, keeping previous snapshot",
                extra={"path": str(self._path), "error": str(e)}
            )
            return False

        with self._lock:
            self._config = new_config
        logger.info("SLA configuration reloaded successfully")
        return True

    def start_watching(self) -> None:
        """
        Start watching configuration file for changes.

        Skips watching if the file doesn't exist or the platform offers no
        file-system notifications.
        """
        if self._path is None:
            raise RuntimeError("Config not loaded. Call load() first.")

        if not self._path.exists():
            logger.info(
                f"Config file doesn't exist, skipping file watch: {self._path}. "
                "Using default SLA configuration."
            )
            return

        try:
            self._observer = Observer()
            handler = ConfigFileHandler(self, self._path)
            self._observer.schedule(
                handler,
                str(self._path.parent),
                recursive=False
            )
            self._observer.start()
            logger.info(f"Started watching config file: {self._path}")
        except OSError as e:
            logger.warning(
                f"File watching not available, using static config: {e}"
            )
            self._observer = None

    def stop_watching(self) -> None:
        """Stop watching configuration file (safe to call even if not watching)."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    @property
    def config(self) -> SLASettings:
        """Get current configuration."""
        with self._lock:
            if self._config is None:
                raise RuntimeError("SLA configuration not loaded")
            return self._config

    def get_config(self) -> SLASettings:
        return self.config
def create_sla_service(
    settings: Optional[Settings] = None,
    configure_logging: bool = True
) -> SLAService:
    """
    Build an SLAService backed by the configured policy file.

    Configures JSON logging from ``log_level`` and ``environment`` unless
    ``configure_logging`` is False (for hosts that own logging setup).
    Starts the file watcher when ``sla_watch_config`` is enabled; stop it
    with ``service.config_provider.stop_watching()``.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.environment)

    manager = SLAConfigManager(default_risk_threshold=settings.sla_risk_threshold)
    manager.load(settings.sla_config_path)
    if settings.sla_watch_config:
        manager.start_watching()

    logger.info(
        "SLA service ready",
        extra={
            "config_path": str(settings.sla_config_path),
            "watching": manager.is_watching,
        }
    )
    return SLAService(manager, max_lookahead_days=settings.sla_max_lookahead_days)
