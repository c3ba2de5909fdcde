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
Fluent builder for declarative plot specifications.

    spec = assemble(records, configure)

`configure` receives a PlotBuilder; the result is a PlotSpec wrapping the
option tree handed to the external plot renderer.
"""

from .bindings import BindingsManager, DataBindings, FinalizedRegistryError
from .builders import (
    LAYER_BUILDERS,
    AreaLayer,
    BarsLayer,
    DensityLayer,
    HistogramLayer,
    HLinesLayer,
    LayerBuilder,
    LinesLayer,
    PlotBuilder,
    PointsLayer,
    VLinesLayer,
    get_available_layers,
)
from .options import Pos, PosOptions, PlotFeature, Scale, Stat, StatOptions, ggsize
from .plot import PlotSpec, assemble, lets_plot
from .validation import validate_plot_spec

__all__ = [
    'AreaLayer', 'BarsLayer', 'BindingsManager', 'DataBindings', 'DensityLayer',
    'FinalizedRegistryError', 'HLinesLayer', 'HistogramLayer', 'LAYER_BUILDERS',
    'LayerBuilder', 'LinesLayer', 'PlotBuilder', 'PlotFeature', 'PlotSpec',
    'PointsLayer', 'Pos', 'PosOptions', 'Scale', 'Stat', 'StatOptions',
    'VLinesLayer', 'assemble', 'get_available_layers', 'ggsize', 'lets_plot',
    'validate_plot_spec',
]
