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

import copy
import datetime as dt
import json
import logging
from typing import Any, Callable, Dict, Iterable

import numpy as np
import pandas as pd

from .bindings import BindingsManager
from .builders import PlotBuilder
from .options import PLOT_DATA

logger = logging.getLogger(__name__)

PlotConfigurator = Callable[[PlotBuilder], Any]


def _json_default(value: Any) -> Any:
    """Converts values json can't serialize on its own."""
    if isinstance(value, (pd.Timestamp, dt.datetime, dt.date)):
        return value.isoformat()
    if isinstance(value, np.generic):
        return value.item()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class PlotSpec:
    """The assembled plot specification tree."""

    def __init__(self, spec: Dict[str, Any]):
        self.spec = spec

    def __eq__(self, other) -> bool:
        return isinstance(other, PlotSpec) and self.spec == other.spec

    def __repr__(self) -> str:
        return f"PlotSpec({self.spec!r})"

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.spec)

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.spec, default=_json_default, **kwargs)

    def to_frame(self) -> pd.DataFrame:
        """The plot-wide data as a DataFrame, one column per bound extractor."""
        return pd.DataFrame(self.spec.get(PLOT_DATA, {}))

    def process(self, transform: Callable[[Dict[str, Any]], Dict[str, Any]]) -> "PlotSpec":
        """Runs an external spec transform on a copy of the tree."""
        return PlotSpec(transform(self.to_dict()))

    def render(self, renderer: Callable[[Dict[str, Any]], Any]) -> Any:
        """Hands a copy of the tree to an external renderer and returns its output."""
        return renderer(self.to_dict())


def assemble(data: Iterable[Any], configurator: PlotConfigurator) -> PlotSpec:
    """Builds the plot spec for `data` as configured by `configurator`."""
    bindings = BindingsManager()
    builder = PlotBuilder(bindings.get_manager(data))
    configurator(builder)
    spec = builder.get_spec()
    logger.debug("Assembled plot with %d layer(s) over %d data source(s)",
                 len(builder.layers), len(bindings))
    return PlotSpec(spec)


lets_plot = assemble
