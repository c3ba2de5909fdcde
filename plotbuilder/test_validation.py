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
Tests for plot spec validation.
"""

from plotbuilder import assemble, validate_plot_spec


def test_assembled_spec_is_valid():
    def configure(plot):
        plot.x(lambda pair: pair[0])
        plot.line(lambda l: l.y(lambda pair: pair[1]))
        plot.hlines(lambda l: l.yintercept(lambda r: r), data=[5])

    result = validate_plot_spec(assemble([(1, 2), (2, 3)], configure).spec)
    assert result == {'valid': True, 'errors': [], 'warnings': []}


def test_dangling_columns_are_errors():
    spec = {
        "kind": "plot",
        "data": {"list0": [1, 2]},
        "mapping": {"x": "list1"},
        "layers": [
            {"geom": "line", "mapping": {"y": "list0"}},
            {"geom": "point", "mapping": {"y": "list0"}, "data": {"list1": [3]}},
        ],
    }
    result = validate_plot_spec(spec)
    assert not result['valid']
    assert len(result['errors']) == 2
    assert "'x'" in result['errors'][0]
    assert "Layer 1 (point)" in result['errors'][1]


def test_missing_kind_and_geom():
    result = validate_plot_spec({"layers": [{"mapping": {}}]})
    assert not result['valid']
    assert any("'kind'" in e for e in result['errors'])
    assert any("no 'geom'" in e for e in result['errors'])


def test_data_warnings():
    spec = {
        "kind": "plot",
        "data": {"list0": [1, 2, 3], "list1": [None, None, 4], "list2": [1]},
        "mapping": {},
        "layers": [],
    }
    result = validate_plot_spec(spec)
    assert result['valid']
    assert len(result['warnings']) == 2
    assert "unequal length" in result['warnings'][0]
    assert "'list1' has 66.7% missing values" in result['warnings'][1]


def test_validation_does_not_mutate():
    spec = {"kind": "plot", "data": {}, "mapping": {}, "layers": []}
    validate_plot_spec(spec)
    assert spec == {"kind": "plot", "data": {}, "mapping": {}, "layers": []}
