# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (C) 2024 Jonathan Lee
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License version 3
# as published by the Free Software Foundation.
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see https://www.gnu.org/licenses/.

"""
Option keys and option values understood by the plot spec consumer.

Key strings must match the consumer's contract exactly.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# --- Option Keys ---

KIND = "kind"
KIND_PLOT = "plot"

PLOT_DATA = "data"
PLOT_MAPPING = "mapping"
PLOT_LAYERS = "layers"
PLOT_SCALES = "scales"

LAYER_GEOM = "geom"
LAYER_STAT = "stat"
LAYER_POS = "position"
LAYER_DATA = "data"
POS_NAME = "name"

SCALE_AES = "aesthetic"
SCALE_NAME = "name"
SCALE_BREAKS = "breaks"
SCALE_LABELS = "labels"
SCALE_LIMITS = "limits"
SCALE_EXPAND = "expand"
SCALE_NA_VALUE = "na_value"
SCALE_DATE_TIME = "datetime"

GGSIZE = "ggsize"
GGSIZE_WIDTH = "width"
GGSIZE_HEIGHT = "height"

# --- Kinds ---

GEOM_LINE = "line"
GEOM_POINT = "point"
GEOM_VLINE = "vline"
GEOM_HLINE = "hline"
GEOM_BAR = "bar"
GEOM_AREA = "area"
GEOM_DENSITY = "density"
GEOM_HISTOGRAM = "histogram"

STAT_IDENTITY = "identity"
STAT_COUNT = "count"
STAT_BIN = "bin"
STAT_DENSITY = "density"
STAT_BOXPLOT = "boxplot"

POS_IDENTITY = "identity"
POS_STACK = "stack"
POS_FILL = "fill"
POS_DODGE = "dodge"
POS_JITTER = "jitter"
POS_NUDGE = "nudge"

AES_X = "x"
AES_Y = "y"


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


@dataclass(frozen=True)
class StatOptions:
    """A statistic kind plus the parameters merged into the layer spec."""
    kind: str
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PosOptions:
    """A position adjustment kind plus its parameters."""
    kind: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_spec(self) -> Any:
        """The bare kind, or a dict naming the kind when there are parameters."""
        if not self.parameters:
            return self.kind
        return {POS_NAME: self.kind, **self.parameters}


class Stat:
    """Factories for the statistics a layer can request."""

    identity = StatOptions(STAT_IDENTITY)

    @staticmethod
    def count() -> StatOptions:
        return StatOptions(STAT_COUNT)

    @staticmethod
    def density(bw: Any = None, kernel: Optional[str] = None,
                adjust: Optional[float] = None, n: Optional[int] = None) -> StatOptions:
        return StatOptions(STAT_DENSITY, _drop_none({
            'bw': bw, 'kernel': kernel, 'adjust': adjust, 'n': n
        }))

    @staticmethod
    def bin(bins: Optional[int] = None, binwidth: Optional[float] = None,
            center: Optional[float] = None, boundary: Optional[float] = None) -> StatOptions:
        return StatOptions(STAT_BIN, _drop_none({
            'bins': bins, 'binwidth': binwidth, 'center': center, 'boundary': boundary
        }))

    @staticmethod
    def boxplot(coef: Optional[float] = None, varwidth: Optional[bool] = None) -> StatOptions:
        return StatOptions(STAT_BOXPLOT, _drop_none({'coef': coef, 'varwidth': varwidth}))


class Pos:
    """Factories for position adjustments."""

    identity = PosOptions(POS_IDENTITY)
    stack = PosOptions(POS_STACK)
    fill = PosOptions(POS_FILL)

    @staticmethod
    def dodge(width: Optional[float] = None) -> PosOptions:
        return PosOptions(POS_DODGE, _drop_none({'width': width}))

    @staticmethod
    def jitter(width: Optional[float] = None, height: Optional[float] = None) -> PosOptions:
        return PosOptions(POS_JITTER, _drop_none({'width': width, 'height': height}))

    @staticmethod
    def nudge(x: Optional[float] = None, y: Optional[float] = None) -> PosOptions:
        return PosOptions(POS_NUDGE, _drop_none({'x': x, 'y': y}))


@dataclass
class Scale:
    """Scale options for one aesthetic; unset entries are dropped by to_spec()."""
    aesthetic: str
    name: Optional[str] = None
    breaks: Optional[List[Any]] = None
    labels: Optional[List[str]] = None
    limits: Optional[List[Any]] = None
    expand: Any = None
    na_value: Any = None
    other: Dict[str, Any] = field(default_factory=dict)

    def to_spec(self) -> Dict[str, Any]:
        spec = _drop_none({
            SCALE_AES: self.aesthetic,
            SCALE_NAME: self.name,
            SCALE_BREAKS: self.breaks,
            SCALE_LABELS: self.labels,
            SCALE_LIMITS: self.limits,
            SCALE_EXPAND: self.expand,
            SCALE_NA_VALUE: self.na_value,
        })
        spec.update(self.other)
        return spec


@dataclass(frozen=True)
class PlotFeature:
    """A plot-level directive that contributes a single top-level key."""
    kind: str
    options: Dict[str, Any]

    def to_spec(self) -> Dict[str, Any]:
        return dict(self.options)


def ggsize(width: int, height: int) -> PlotFeature:
    """Plot size feature, in pixels."""
    return PlotFeature(GGSIZE, {GGSIZE_WIDTH: width, GGSIZE_HEIGHT: height})
