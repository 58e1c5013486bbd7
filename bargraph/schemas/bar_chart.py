from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional, Union

from .axis_options import AxisOptionsSchema


class Pos(BaseModel):
    """Percent box on the slide (0..100)."""

    x: float = Field(5.0, description="left percentage (0..100)")
    y: float = Field(5.0, description="top percentage (0..100)")
    w: float = Field(90.0, description="width percentage (0..100)")
    h: float = Field(90.0, description="height percentage (0..100)")


class BarChartSchema(BaseModel):
    """One chart entry of a chart document.

    Types are checked loosely here; ChartConfig validates each setting again
    when it is applied and keeps its default for rejected ones.
    """

    id: Optional[str] = None
    data: List[Dict[str, Any]] = Field(default_factory=list)
    c_series: str
    n_series: List[str]
    tooltip_series: Optional[List[str]] = None
    graph_title: Optional[str] = None
    c_axis_title: Optional[str] = None
    n_axis_title: Optional[str] = None
    vertical: Optional[bool] = None
    grouped: Optional[bool] = None
    tooltips: Optional[bool] = None
    bar_labels: Optional[bool] = None
    width: Optional[float] = None
    height: Optional[float] = None
    margins: Optional[List[float]] = Field(default=None, description="top, right, bottom, left")
    padding: Optional[float] = None
    legend_radius: Optional[float] = None
    log: bool = Field(default=False, description="logarithmic numerical axis")
    c_axis: AxisOptionsSchema = Field(default_factory=AxisOptionsSchema)
    n_axis: AxisOptionsSchema = Field(default_factory=AxisOptionsSchema)
    pos: Pos = Field(default_factory=Pos)

    @field_validator("n_series", "tooltip_series", mode="before")
    @classmethod
    def wrap_single_key(cls, v: Union[str, List[str], None]):
        if isinstance(v, str):
            return [v]
        return v

    def settings(self) -> Dict[str, Any]:
        """ChartConfig settings given in this entry."""
        exclude = {"id", "log", "c_axis", "n_axis", "pos"}
        return {
            name: value
            for name, value in self.model_dump(exclude=exclude).items()
            if value is not None
        }
