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
Data bindings: column names for extractor functions, and the columns they produce.

Data sources and extractors are keyed by identity. Each registry keeps a
strong reference to everything it keys on, so an id() key is never reused
while the registry is alive.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

Extractor = Callable[[Any], Any]

OPEN = "open"
MATERIALIZED = "materialized"


class FinalizedRegistryError(RuntimeError):
    """Raised when a new column is bound after the registry produced its data."""


def _records(data: Iterable[Any]) -> List[Any]:
    """Returns the records of a data source; DataFrame rows become dicts."""
    if isinstance(data, pd.DataFrame):
        return data.to_dict(orient="records")
    return list(data)


class DataBindings:
    """Column names and lazily extracted columns for one data source."""

    def __init__(self, data: Iterable[Any], owner: Optional["BindingsManager"] = None):
        self.data = data
        self.owner = owner
        self._state = OPEN
        self._names: Dict[int, str] = {}
        self._extractors: List[Extractor] = []
        self._data_source: Optional[Dict[str, List[Any]]] = None

    @property
    def is_finalized(self) -> bool:
        return self._state == MATERIALIZED

    @property
    def names(self) -> Dict[str, Extractor]:
        """Column name to extractor, in assignment order."""
        return {self._names[id(fn)]: fn for fn in self._extractors}

    def name_for(self, extractor: Extractor) -> str:
        """Returns the column name for an extractor, assigning the next one if it is new."""
        key = id(extractor)
        if key in self._names:
            return self._names[key]
        if self.is_finalized:
            raise FinalizedRegistryError(
                f"Cannot bind a new column: data for this source was already produced "
                f"with columns {list(self._names.values())}"
            )
        name = f"list{len(self._names)}"
        self._names[key] = name
        self._extractors.append(extractor)
        logger.debug("Bound %r to column '%s'", extractor, name)
        return name

    @property
    def data_source(self) -> Dict[str, List[Any]]:
        """Column name to extracted values. Computed once; freezes the name assignment."""
        if self._data_source is None:
            records = _records(self.data)
            columns = {
                self._names[id(fn)]: [fn(record) for record in records]
                for fn in self._extractors
            }
            self._data_source = columns
            self._state = MATERIALIZED
            logger.debug("Materialized %d column(s) over %d record(s)", len(columns), len(records))
        return self._data_source

    def get_manager(self, data: Iterable[Any]) -> "DataBindings":
        """Returns the registry for another data source from the same manager."""
        if self.owner is None:
            raise ValueError("These bindings are not owned by a BindingsManager")
        return self.owner.get_manager(data)


class BindingsManager:
    """One registry per distinct data source object, for a single plot assembly."""

    def __init__(self):
        self._bindings: Dict[int, DataBindings] = {}

    def __len__(self) -> int:
        return len(self._bindings)

    def get_manager(self, data: Iterable[Any]) -> DataBindings:
        """Returns the registry for this exact data source, creating it on first use."""
        key = id(data)
        bindings = self._bindings.get(key)
        if bindings is None:
            bindings = DataBindings(data, self)
            self._bindings[key] = bindings
            logger.debug("Created bindings #%d for %s", len(self._bindings), type(data).__name__)
        return bindings
