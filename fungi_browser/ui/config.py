from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fungi_browser.config.model import GlobalConfig
from fungi_browser.core.view_registry import ViewRegistry
from fungi_browser.services.export_service import ExportService
from fungi_browser.services.session_service import SessionRegistry


@dataclass
class AppConfig:
    """
    Shared objects handed to layout + callback registration functions
    instead of module-level globals. Holds no per-user state itself:
    everything user specific lives in a session from `sessions`.
    """
    config_root: Path
    global_config: GlobalConfig

    registry: Optional[ViewRegistry] = None
    sessions: Optional[SessionRegistry] = None
    export_service: Optional[ExportService] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
        if self.sessions is None:
            raise RuntimeError("AppConfig.sessions must be initialized.")
        if self.export_service is None:
            raise RuntimeError("AppConfig.export_service must be initialized.")
