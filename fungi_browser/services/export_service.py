from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

import plotly.graph_objs as go

from fungi_browser.core.exceptions import ExportError

logger = logging.getLogger(__name__)


def export_filename(view_id: str, on: date, image_format: str = "png") -> str:
    """Deterministic file name from the visualisation kind and the date, e.g. 'wordcloud_2024-03-01.png'."""
    return f"{view_id}_{on.isoformat()}.{image_format}"


@dataclass(frozen=True)
class ExportedImage:
    filename: str
    content: bytes
    mime_type: str


class ExportService:
    """
    Renders a visualisation figure to image bytes for download.

    One-shot and read-only with respect to the figure: a failure here (most
    often a missing kaleido/Chrome install) is raised as ExportError so the
    caller can report it without touching the live view.
    """

    def __init__(self, image_format: str = "png", width: int = 1000, height: int = 600, scale: float = 2.0):
        self.image_format = image_format
        self.width = width
        self.height = height
        self.scale = scale

    def export(self, figure: go.Figure, view_id: str, on: Optional[date] = None) -> ExportedImage:
        on = on or date.today()
        filename = export_filename(view_id, on, self.image_format)

        try:
            # Requires kaleido
            content = figure.to_image(
                format=self.image_format,
                width=self.width,
                height=self.height,
                scale=self.scale,
            )
        except Exception as e:
            logger.exception("Failed to render figure for export", extra={"view_id": view_id})
            raise ExportError(f"Could not export {view_id} image: {e}") from e

        logger.info("Exported figure", extra={"view_id": view_id, "export_file": filename, "n_bytes": len(content)})
        return ExportedImage(filename=filename, content=content, mime_type=f"image/{self.image_format}")
