# Drawing steps of a bar graph render

# Each module exposes render(surface, layout, context)
from . import axes
from . import bars
from . import legend
from . import titles

__all__ = [
    "axes",
    "bars",
    "legend",
    "titles",
]
