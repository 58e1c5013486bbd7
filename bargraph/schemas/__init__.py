# Pydantic schemas for chart documents

# Import all schemas for easier access
from . import axis_options
from . import bar_chart

__all__ = [
    "axis_options",
    "bar_chart",
]
