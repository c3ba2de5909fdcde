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
Builder properties: constant values and data-driven mappings.

Properties are declared on builder classes with prop(), bind_prop() or
scale_prop(). A property object is created the first time it is read from a
builder instance and is cached in that builder's `properties` dict.
"""

from typing import Any, Callable, List, Optional

from .options import SCALE_DATE_TIME, Scale

Extractor = Callable[[Any], Any]


class BindableProperty:
    """A property that can be mapped to a data column."""

    def __init__(self, name: str):
        self.name = name
        self.mapping: Optional[Extractor] = None

    def map(self, mapping: Extractor) -> "BindableProperty":
        if not callable(mapping):
            raise TypeError(
                f"Property '{self.name}' maps to a function of the record, "
                f"got {type(mapping).__name__}: {mapping!r}"
            )
        self.mapping = mapping
        return self

    def __call__(self, mapping: Extractor) -> "BindableProperty":
        return self.map(mapping)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class WriteableProperty(BindableProperty):
    """A property that also accepts a constant value."""

    def __init__(self, name: str):
        super().__init__(name)
        self.const_value: Any = None

    def set(self, value: Any) -> "WriteableProperty":
        self.const_value = value
        return self

    def __call__(self, value: Any) -> "WriteableProperty":
        # Functions are mappings; anything else is a constant.
        if callable(value):
            return self.map(value)
        return self.set(value)


class ScaleableProperty(BindableProperty):
    """A mapped property that can also carry a scale for its aesthetic."""

    def __init__(self, name: str, aes: str):
        super().__init__(name)
        self.aes = aes
        self.scale: Optional[Scale] = None

    def datetime(self, name: Optional[str] = None, breaks: Optional[List[Any]] = None,
                 labels: Optional[List[str]] = None, limits: Optional[List[Any]] = None,
                 expand: Any = None, na_value: Any = None) -> "ScaleableProperty":
        """Marks this aesthetic as date-time."""
        self.scale = Scale(
            self.aes, name, breaks, labels, limits, expand, na_value,
            other={SCALE_DATE_TIME: True}
        )
        return self


class PropertyProvider:
    """Descriptor that creates a builder's property on first access."""

    def __init__(self, create: Callable[[str], BindableProperty]):
        self.create = create
        self.name: Optional[str] = None

    def __set_name__(self, owner, name: str):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        properties = instance.properties
        if self.name not in properties:
            properties[self.name] = self.create(self.name)
        return properties[self.name]


def prop() -> PropertyProvider:
    """Declares a property that takes a constant or a mapping."""
    return PropertyProvider(WriteableProperty)


def bind_prop() -> PropertyProvider:
    """Declares a mapping-only property."""
    return PropertyProvider(BindableProperty)


def scale_prop(aes: str) -> PropertyProvider:
    """Declares a mapping-only property with a scale for `aes`."""
    return PropertyProvider(lambda name: ScaleableProperty(name, aes))
