from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Any, Dict

from bargraph.schemas.bar_chart import BarChartSchema


class DocumentMetadata(BaseModel):
    """Top-level metadata object matching render.py's `meta` map."""

    title: Optional[str] = Field(None, description="Document title")
    author: Optional[str] = Field(None, description="Document author")
    slide_size: Optional[Dict[str, Any]] = Field(
        default_factory=dict,
        description="Slide size config (e.g. preset: '16x9')",
    )


class ChartDocument(BaseModel):
    """Top-level schema of a chart document rendered by `render.py`.

    Expected top-level keys: version, meta, theme, charts.
    Each chart is rendered on its own slide.
    """

    model_config = ConfigDict(extra="allow")

    version: int = Field(1, description="Document version")
    meta: DocumentMetadata = Field(
        default_factory=DocumentMetadata,
        description="Document metadata (meta)",
    )
    theme: Optional[Dict[str, Any]] = Field(
        default_factory=dict,
        description="Theme mapping (series key / font_color -> color)",
    )
    charts: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Chart entries, validated one by one with BarChartSchema",
    )

    def get_chart_count(self) -> int:
        return len(self.charts)

    def get_series_used(self) -> List[str]:
        keys = set()
        for chart in self.charts:
            n_series = chart.get("n_series") or []
            if isinstance(n_series, str):
                n_series = [n_series]
            keys.update(str(k) for k in n_series)
        return sorted(keys)

    def validated_charts(self):
        """Yield (index, BarChartSchema or the ValidationError raised for it)."""
        for idx, raw in enumerate(self.charts, start=1):
            try:
                yield idx, BarChartSchema(**raw)
            except ValueError as e:
                yield idx, e
