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

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from . import options as opt
from .bindings import DataBindings, Extractor
from .options import Pos, PosOptions, PlotFeature, Stat, StatOptions, ggsize
from .properties import (
    BindableProperty,
    ScaleableProperty,
    WriteableProperty,
    bind_prop,
    prop,
    scale_prop,
)

logger = logging.getLogger(__name__)

# --- Base Builders ---

class BuilderBase:
    """Owns a property set over one data binding and flattens it into a spec fragment."""

    def __init__(self, bindings: DataBindings):
        self.bindings = bindings
        self.properties: Dict[str, BindableProperty] = {}

    @property
    def data(self) -> Iterable[Any]:
        return self.bindings.data

    def map(self, selector: Extractor) -> Extractor:
        """Returns `selector` unchanged; reads well when reusing one extractor."""
        return selector

    def collect_parameters(self) -> Dict[str, Any]:
        return {
            name: p.const_value
            for name, p in self.properties.items()
            if isinstance(p, WriteableProperty) and p.const_value is not None
        }

    def collect_mappings(self) -> Dict[str, str]:
        return {
            name: self.bindings.name_for(p.mapping)
            for name, p in self.properties.items()
            if p.mapping is not None
        }

    def get_spec(self) -> Dict[str, Any]:
        spec = self.collect_parameters()
        spec[opt.PLOT_MAPPING] = self.collect_mappings()
        return spec


class GenericBuilder(BuilderBase):
    alpha = prop()
    color = prop()
    fill = prop()


# --- Layers ---

class LayerBuilder(GenericBuilder):
    """Base class of all geometry layers."""

    geom_kind: str = ""
    default_stat: StatOptions = Stat.identity
    default_position: PosOptions = Pos.identity

    def __init__(self, bindings: DataBindings, plot: "PlotBuilder"):
        super().__init__(bindings)
        self.plot = plot
        self.stat = self.default_stat
        self.position = self.default_position

    @property
    def density(self) -> StatOptions:
        return Stat.density()

    @property
    def count(self) -> StatOptions:
        return Stat.count()

    @property
    def bin(self) -> StatOptions:
        return Stat.bin()

    @property
    def boxplot(self) -> StatOptions:
        return Stat.boxplot()

    def get_spec(self) -> Dict[str, Any]:
        spec = super().get_spec()
        spec[opt.LAYER_GEOM] = self.geom_kind
        spec[opt.LAYER_STAT] = self.stat.kind
        spec[opt.LAYER_POS] = self.position.to_spec()
        spec.update(self.stat.parameters)
        if self.bindings is not self.plot.bindings:
            spec[opt.LAYER_DATA] = self.bindings.data_source
        return spec


class XYNumbersLayer(LayerBuilder):
    x = bind_prop()
    y = bind_prop()


class LinesLayer(XYNumbersLayer):
    geom_kind = opt.GEOM_LINE
    linetype = prop()
    size = prop()


class PointsLayer(XYNumbersLayer):
    geom_kind = opt.GEOM_POINT
    shape = prop()
    stroke = prop()
    size = prop()


class VLinesLayer(LayerBuilder):
    geom_kind = opt.GEOM_VLINE
    xintercept = prop()
    linetype = prop()
    size = prop()

    @property
    def x(self) -> WriteableProperty:
        return self.xintercept


class HLinesLayer(LayerBuilder):
    geom_kind = opt.GEOM_HLINE
    yintercept = prop()
    linetype = prop()
    size = prop()

    @property
    def y(self) -> WriteableProperty:
        return self.yintercept


class BarsLayer(XYNumbersLayer):
    geom_kind = opt.GEOM_BAR
    default_stat = Stat.count()
    default_position = Pos.stack
    width = prop()
    size = prop()


class AreaLayer(XYNumbersLayer):
    geom_kind = opt.GEOM_AREA
    default_position = Pos.stack
    linetype = prop()
    size = prop()


class DensityLayer(XYNumbersLayer):
    geom_kind = opt.GEOM_DENSITY
    default_stat = Stat.density()
    width = prop()
    size = prop()
    weight = prop()


class HistogramLayer(XYNumbersLayer):
    geom_kind = opt.GEOM_HISTOGRAM
    default_stat = Stat.bin()
    default_position = Pos.stack
    width = prop()
    size = prop()
    weight = prop()


LAYER_BUILDERS: Dict[str, Type[LayerBuilder]] = {
    'line': LinesLayer,
    'points': PointsLayer,
    'vlines': VLinesLayer,
    'hlines': HLinesLayer,
    'bars': BarsLayer,
    'area': AreaLayer,
    'density': DensityLayer,
    'histogram': HistogramLayer,
}

LayerConfigurator = Callable[[LayerBuilder], Any]


def get_available_layers() -> List[str]:
    """Returns the layer kinds accepted by PlotBuilder.add_layer."""
    return sorted(LAYER_BUILDERS)


# --- Plot ---

class PlotBuilder(GenericBuilder):
    """Root builder: plot-wide mappings and scales, layers and features."""

    x = scale_prop(opt.AES_X)
    y = scale_prop(opt.AES_Y)

    def __init__(self, bindings: DataBindings):
        super().__init__(bindings)
        self.layers: List[LayerBuilder] = []
        self.features: List[PlotFeature] = []

    def add_layer(self, kind: str, configurator: Optional[LayerConfigurator] = None,
                  data: Optional[Iterable[Any]] = None) -> LayerBuilder:
        """Creates a layer over `data` (default: the plot data) and configures it."""
        layer_cls = LAYER_BUILDERS.get(kind)
        if layer_cls is None:
            raise ValueError(f"Unknown layer kind '{kind}'. Available: {get_available_layers()}")

        bindings = self.bindings if data is None else self.bindings.get_manager(data)
        layer = layer_cls(bindings, self)
        self.layers.append(layer)
        logger.debug("Added %s layer #%d (own data: %s)", kind, len(self.layers),
                     bindings is not self.bindings)
        if configurator is not None:
            configurator(layer)
        return layer

    def add_feature(self, feature: PlotFeature) -> PlotFeature:
        self.features.append(feature)
        return feature

    def size(self, width: int, height: int) -> PlotFeature:
        return self.add_feature(ggsize(width, height))

    def line(self, configurator=None, data=None) -> LinesLayer:
        return self.add_layer('line', configurator, data)

    def points(self, configurator=None, data=None) -> PointsLayer:
        return self.add_layer('points', configurator, data)

    def vlines(self, configurator=None, data=None) -> VLinesLayer:
        return self.add_layer('vlines', configurator, data)

    def hlines(self, configurator=None, data=None) -> HLinesLayer:
        return self.add_layer('hlines', configurator, data)

    def bars(self, configurator=None, data=None) -> BarsLayer:
        return self.add_layer('bars', configurator, data)

    def area(self, configurator=None, data=None) -> AreaLayer:
        return self.add_layer('area', configurator, data)

    def density(self, configurator=None, data=None) -> DensityLayer:
        return self.add_layer('density', configurator, data)

    def histogram(self, configurator=None, data=None) -> HistogramLayer:
        return self.add_layer('histogram', configurator, data)

    def collect_scales(self) -> List[Dict[str, Any]]:
        return [
            p.scale.to_spec()
            for p in self.properties.values()
            if isinstance(p, ScaleableProperty) and p.scale is not None
        ]

    def get_spec(self) -> Dict[str, Any]:
        # Every builder names its columns before any dataset is read.
        for builder in [self] + self.layers:
            builder.collect_mappings()

        spec = super().get_spec()
        spec[opt.KIND] = opt.KIND_PLOT
        spec[opt.PLOT_LAYERS] = [layer.get_spec() for layer in self.layers]
        spec[opt.PLOT_DATA] = self.bindings.data_source
        spec[opt.PLOT_SCALES] = self.collect_scales()
        for feature in self.features:
            spec[feature.kind] = feature.to_spec()
        return spec
