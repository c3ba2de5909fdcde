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

from typing import Any, Dict, List

from . import options as opt


def _check_dataset(label: str, data: Dict[str, List[Any]], warnings: List[str]) -> None:
    lengths = {len(values) for values in data.values()}
    if len(lengths) > 1:
        warnings.append(f"{label} data has columns of unequal length: {sorted(lengths)}")

    for col, values in data.items():
        if not values:
            continue
        null_pct = sum(1 for v in values if v is None) / len(values) * 100
        if null_pct > 50:
            warnings.append(f"{label} column '{col}' has {null_pct:.1f}% missing values")


def _check_mapping(label: str, mapping: Dict[str, str], available: Dict[str, Any],
                   errors: List[str]) -> None:
    for aes, col in mapping.items():
        if col not in available:
            errors.append(f"{label} maps '{aes}' to column '{col}' which is not in its data")


def validate_plot_spec(spec: Dict[str, Any]) -> Dict[str, Any]:
    """Checks an assembled spec tree for dangling columns and suspicious data."""
    errors = []
    warnings = []

    if spec.get(opt.KIND) != opt.KIND_PLOT:
        errors.append(f"Spec '{opt.KIND}' must be '{opt.KIND_PLOT}'")

    plot_data = spec.get(opt.PLOT_DATA) or {}
    _check_dataset("Plot", plot_data, warnings)
    _check_mapping("Plot", spec.get(opt.PLOT_MAPPING) or {}, plot_data, errors)

    for i, layer in enumerate(spec.get(opt.PLOT_LAYERS) or []):
        label = f"Layer {i} ({layer.get(opt.LAYER_GEOM, '?')})"
        if not layer.get(opt.LAYER_GEOM):
            errors.append(f"Layer {i} has no '{opt.LAYER_GEOM}'")

        if opt.LAYER_DATA in layer:
            layer_data = layer[opt.LAYER_DATA] or {}
            _check_dataset(label, layer_data, warnings)
        else:
            layer_data = plot_data
        _check_mapping(label, layer.get(opt.PLOT_MAPPING) or {}, layer_data, errors)

    return {
        'valid': len(errors) == 0,
        'errors': errors,
        'warnings': warnings
    }
