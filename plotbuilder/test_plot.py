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
End-to-end tests for plot assembly and the PlotSpec result.
"""

import datetime as dt
import json

import numpy as np
import pandas as pd
import pytest

from plotbuilder import FinalizedRegistryError, PlotSpec, assemble, ggsize, lets_plot


def first(pair):
    return pair[0]


def test_line_and_bars_scenario():
    data = [(1, 2), (2, 3)]

    def configure_line(layer):
        layer.x(first)
        layer.y(lambda pair: "a")

    def configure_bars(layer):
        layer.stat = layer.density

    def configure(plot):
        plot.x(first).datetime("date")
        plot.line(configure_line)
        plot.bars(configure_bars)
        plot.add_feature(ggsize(100, 10))

    spec = assemble(data, configure).spec

    assert spec["kind"] == "plot"
    assert spec["mapping"] == {"x": "list0"}
    assert spec["data"] == {"list0": [1, 2], "list1": ["a", "a"]}
    assert spec["scales"] == [{"aesthetic": "x", "name": "date", "datetime": True}]
    assert spec["ggsize"] == {"width": 100, "height": 10}

    line, bars = spec["layers"]
    assert line == {
        "mapping": {"x": "list0", "y": "list1"},
        "geom": "line",
        "stat": "identity",
        "position": "identity",
    }
    assert bars == {
        "mapping": {},
        "geom": "bar",
        "stat": "density",
        "position": "stack",
    }


def test_lets_plot_is_assemble():
    assert lets_plot is assemble


def test_per_layer_dataset():
    points = [(1, 1), (2, 4), (3, 9)]
    marks = [{"at": 2}]

    def configure_vline(layer):
        layer.xintercept(lambda m: m["at"])
        layer.color("red")

    def configure(plot):
        plot.points(lambda l: l.x(first))
        plot.vlines(configure_vline, data=marks)

    spec = assemble(points, configure).spec
    pts, vline = spec["layers"]
    assert spec["data"] == {"list0": [1, 2, 3]}
    assert "data" not in pts
    assert vline["data"] == {"list0": [2]}
    assert vline["mapping"] == {"xintercept": "list0"}
    assert vline["color"] == "red"


def test_reading_data_while_configuring_aborts_assembly():
    data = [(1, 2)]

    def configure(plot):
        plot.line(lambda l: l.x(first))
        plot.bindings.data_source
        plot.line(lambda l: l.y(lambda pair: pair[1]))

    with pytest.raises(FinalizedRegistryError):
        assemble(data, configure)


def test_extractor_errors_abort_assembly():
    def configure(plot):
        plot.x(lambda record: record["missing"])

    with pytest.raises(KeyError):
        assemble([{"present": 1}], configure)


def test_each_assembly_gets_fresh_bindings():
    data = [(1, 2)]

    def configure_x(plot):
        plot.x(first)

    def configure_y(plot):
        plot.y(lambda pair: pair[1])

    assert assemble(data, configure_x).spec["data"] == {"list0": [1]}
    assert assemble(data, configure_y).spec["data"] == {"list0": [2]}


def test_dataframe_source():
    df = pd.DataFrame({"day": [1, 2], "sales": [3.5, 4.0]})

    def configure_area(layer):
        layer.y(lambda row: row["sales"])
        layer.alpha(0.3)

    def configure(plot):
        plot.x(lambda row: row["day"])
        plot.area(configure_area)

    spec = assemble(df, configure)
    frame = spec.to_frame()
    assert list(frame.columns) == ["list0", "list1"]
    assert frame["list1"].tolist() == [3.5, 4.0]
    assert spec.spec["layers"][0]["alpha"] == 0.3


def test_to_json_handles_dates_and_numpy():
    data = [dt.date(2024, 1, 1), dt.date(2024, 1, 2)]

    def configure(plot):
        plot.x(lambda d: d).datetime()
        plot.points(lambda l: l.y(lambda d: np.int64(d.day)))

    decoded = json.loads(assemble(data, configure).to_json())
    assert decoded["data"] == {"list0": ["2024-01-01", "2024-01-02"], "list1": [1, 2]}
    assert decoded["scales"] == [{"aesthetic": "x", "datetime": True}]


def test_process_and_render_use_copies():
    spec = assemble([1, 2], lambda plot: plot.x(lambda n: n))

    def transform(tree):
        tree["kind"] = "processed"
        tree["data"]["list0"].append(3)
        return tree

    processed = spec.process(transform)
    assert isinstance(processed, PlotSpec)
    assert processed.spec["kind"] == "processed"
    assert spec.spec["kind"] == "plot"
    assert spec.spec["data"]["list0"] == [1, 2]
    assert spec.render(lambda tree: len(tree["data"]["list0"])) == 2


def test_spec_equality():
    def configure(plot):
        plot.size(10, 10)

    assert assemble([1], configure) == assemble([1], configure)
    assert assemble([1], configure) != assemble([2], lambda plot: plot.x(lambda n: n))
