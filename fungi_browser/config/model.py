from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

DEFAULT_SOURCE_URL = "https://www.pnwherbaria.org/data/getdataset.php?File=UBC_Fungi_Native.zip"


@dataclass(frozen=True)
class GlobalConfig:
    """
    Parsed global.json.

    - ui_title: navbar / browser tab title
    - source_url: zipped occurrence archive to fetch
    - request_timeout: seconds before the fetch is abandoned
    - year_min / year_max: full domain of the year slider
    - display_cap: maximum rows rendered in the table
    - bar_chart_top_n: number of bars in the bar chart
    - session_ttl_seconds / max_sessions: idle-session eviction limits
    """

    ui_title: str = "UBC Fungi Native Dataset Summary"
    source_url: str = DEFAULT_SOURCE_URL
    request_timeout: float = 60.0
    year_min: int = 1850
    year_max: int = 2023
    display_cap: int = 1000
    bar_chart_top_n: int = 10
    session_ttl_seconds: int = 3600
    max_sessions: int = 32

    @property
    def year_domain(self) -> Tuple[int, int]:
        return self.year_min, self.year_max

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> GlobalConfig:
        defaults = cls()
        return cls(
            ui_title=str(raw.get("ui_title", defaults.ui_title)),
            source_url=str(raw.get("source_url", defaults.source_url)),
            request_timeout=float(raw.get("request_timeout", defaults.request_timeout)),
            year_min=int(raw.get("year_min", defaults.year_min)),
            year_max=int(raw.get("year_max", defaults.year_max)),
            display_cap=int(raw.get("display_cap", defaults.display_cap)),
            bar_chart_top_n=int(raw.get("bar_chart_top_n", defaults.bar_chart_top_n)),
            session_ttl_seconds=int(raw.get("session_ttl_seconds", defaults.session_ttl_seconds)),
            max_sessions=int(raw.get("max_sessions", defaults.max_sessions)),
        )
