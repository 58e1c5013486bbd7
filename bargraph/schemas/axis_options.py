from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Callable, List, Optional, Union


class AxisOptionsSchema(BaseModel):
    """Tick options for one axis. Empty / zero values fall back to defaults."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ticks: Optional[int] = Field(default=None, ge=0, description="approximate tick count")
    tick_values: Optional[List[Any]] = Field(default=None, description="explicit tick values")
    tick_format: Optional[Union[str, Callable[[Any], Any]]] = Field(
        default=None, description="format spec (e.g. '.1f') or callable"
    )
    tick_padding: Optional[float] = Field(default=None, ge=0)
    tick_size: Optional[float] = Field(default=None, ge=0)
