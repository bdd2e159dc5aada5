from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from fungi_browser.config.loader import load_global_config
from fungi_browser.config.model import GlobalConfig
from fungi_browser.core.view_registry import ViewRegistry
from fungi_browser.services.dataset_service import DatasetService
from fungi_browser.services.export_service import ExportService
from fungi_browser.services.session_service import BrowserSession, SessionRegistry
from fungi_browser.ui.callbacks.callbacks_explore import register_explore_callbacks
from fungi_browser.ui.callbacks.callbacks_filters import register_filter_callbacks
from fungi_browser.ui.callbacks.callbacks_io import register_io_callbacks
from fungi_browser.ui.callbacks.callbacks_render import register_render_callbacks
from fungi_browser.ui.config import AppConfig
from fungi_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def build_view_registry() -> ViewRegistry:
    from fungi_browser.views import WordCloudView, BarChartView

    registry = ViewRegistry()
    registry.register(WordCloudView)
    registry.register(BarChartView)
    return registry


def build_session_registry(global_config: GlobalConfig, registry: ViewRegistry) -> SessionRegistry:
    dataset_service = DatasetService(
        source_url=global_config.source_url,
        timeout=global_config.request_timeout,
    )

    def new_session(session_id: str) -> BrowserSession:
        return BrowserSession(
            session_id,
            dataset_service=dataset_service,
            config=global_config,
            registry=registry,
        )

    return SessionRegistry(
        new_session,
        ttl_seconds=global_config.session_ttl_seconds,
        max_sessions=global_config.max_sessions,
    )


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)
    logger.info(
        "Starting fungi browser",
        extra={"source_url": global_config.source_url, "display_cap": global_config.display_cap},
    )

    # 2) Initialize Service Layer
    registry = build_view_registry()
    sessions = build_session_registry(global_config, registry)

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        registry=registry,
        sessions=sessions,
        export_service=ExportService(),
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.CERULEAN],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title

    # Functional layout: evaluated per page load so each tab gets its own session
    def serve_layout():
        return build_layout(ctx)

    app.layout = serve_layout

    register_filter_callbacks(app, ctx)
    register_explore_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_io_callbacks(app, ctx)

    return app
