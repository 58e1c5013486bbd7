"""Validated chart settings.

Every setting is validated when it is assigned. A rejected value is logged and
the previous value is kept, so embedding code can keep configuring the other
fields instead of handling exceptions:

    config = ChartConfig()
    config.width = -5          # logged, width stays 720
    result = config.update(c_series="name", padding=2)
    result.errors              # ("padding: ...",)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Any, List, Mapping, Optional, Tuple

from pydantic import AfterValidator, Field, StrictBool, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


def _require_records(records):
    # records are checked, not copied: stack intervals point back at them
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValueError(f"record {idx} is not a mapping")
        if len(record) < 2:
            raise ValueError(f"record {idx} has fewer than 2 fields")
    return records


NonEmptyStr = Annotated[str, Field(strict=True, min_length=1)]
KeyList = Annotated[List[NonEmptyStr], Field(min_length=1)]
Number = Annotated[float, Field(strict=True)]
NonNegative = Annotated[float, Field(strict=True, ge=0)]
Ratio = Annotated[float, Field(strict=True, ge=0, le=1)]
Dataset = Annotated[List[Any], Field(min_length=1), AfterValidator(_require_records)]
MarginList = Tuple[Number, Number, Number, Number]


@dataclass(frozen=True)
class Margins:
    """Space between the plot area and the canvas edges, in pixels."""

    left: float = 60
    right: float = 60
    top: float = 40
    bottom: float = 40

    @classmethod
    def clockwise(cls, values) -> "Margins":
        """Build from a (top, right, bottom, left) sequence."""
        top, right, bottom, left = values
        return cls(left=left, right=right, top=top, bottom=bottom)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of applying several settings at once."""

    is_valid: bool
    errors: Tuple[str, ...] = ()


class Setting:
    """Descriptor for one validated field of ChartConfig."""

    def __init__(self, shape, message: str, default: Any = None, convert=None):
        self._adapter = TypeAdapter(shape)
        self.message = message
        self.default = default
        self._convert = convert
        self.name = ""

    def __set_name__(self, owner, name):
        self.name = name
        self._attr = f"_{name}"

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj, self._attr, self.default)

    def __set__(self, obj, value):
        self.apply(obj, value)

    def apply(self, obj, value) -> Optional[str]:
        """Validate and store value; return an error message on rejection."""
        if isinstance(value, Margins) and self._convert is Margins.clockwise:
            setattr(obj, self._attr, value)
            return None
        try:
            validated = self._adapter.validate_python(value)
        except ValidationError as e:
            detail = e.errors()[0]["msg"] if e.errors() else str(e)
            error = f"{self.name}: {self.message} (got {value!r}: {detail})"
            logger.error(error)
            return error
        if self._convert is not None:
            validated = self._convert(validated)
        setattr(obj, self._attr, validated)
        return None


class ChartConfig:
    """Settings of a single bar graph.

    Fields left unset read as their defaults (``None`` for data, series and
    titles). ``data`` keeps the caller's record objects, so stack intervals
    and bar data refer to the same mappings. ``bar_width`` is normally written
    by ``BarGraph.init_bar_width``; assigning it afterwards overrides the
    computed thickness until the next init.
    """

    data = Setting(Dataset, "data must be a non-empty list of mappings with 2+ fields")
    c_series = Setting(NonEmptyStr, "c_series must be a non-empty string")
    n_series = Setting(KeyList, "n_series must be a list of non-empty string(s)")
    tooltip_series = Setting(KeyList, "tooltip_series must be a list of non-empty string(s)")

    graph_title = Setting(NonEmptyStr, "graph_title must be a non-empty string")
    c_axis_title = Setting(NonEmptyStr, "c_axis_title must be a non-empty string")
    n_axis_title = Setting(NonEmptyStr, "n_axis_title must be a non-empty string")

    vertical = Setting(StrictBool, "vertical must be a boolean", default=False)
    grouped = Setting(StrictBool, "grouped must be a boolean", default=False)
    tooltips = Setting(StrictBool, "tooltips must be a boolean", default=True)
    bar_labels = Setting(StrictBool, "bar_labels must be a boolean", default=True)

    width = Setting(NonNegative, "width must be a non-negative number", default=720)
    height = Setting(NonNegative, "height must be a non-negative number", default=480)
    margins = Setting(
        MarginList,
        "margins must be four numbers in top, right, bottom, left order",
        default=Margins(),
        convert=Margins.clockwise,
    )
    padding = Setting(Ratio, "padding must be a decimal percentage between 0-1", default=0.25)
    legend_radius = Setting(NonNegative, "legend_radius must be a non-negative number", default=12)
    bar_width = Setting(NonNegative, "bar_width must be a non-negative number")

    def __init__(self, **settings):
        if settings:
            self.update(**settings)

    @classmethod
    def setting_names(cls) -> List[str]:
        return [name for name, attr in vars(cls).items() if isinstance(attr, Setting)]

    def update(self, **settings) -> ValidationResult:
        """Apply several settings, collecting the rejected ones."""
        errors = []
        fields = vars(type(self))
        for name, value in settings.items():
            setting = fields.get(name)
            if not isinstance(setting, Setting):
                error = f"{name}: unknown setting"
                logger.error(error)
                errors.append(error)
                continue
            error = setting.apply(self, value)
            if error:
                errors.append(error)
        return ValidationResult(is_valid=not errors, errors=tuple(errors))

    @property
    def resolved_tooltip_series(self) -> List[str]:
        """Tooltip fields, defaulting to the categorical + numerical fields."""
        if self.tooltip_series:
            return list(self.tooltip_series)
        fields = [self.c_series] if self.c_series else []
        return fields + list(self.n_series or [])

    def __repr__(self):
        body = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.setting_names() if name != "data")
        return f"ChartConfig({body})"
