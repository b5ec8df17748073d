from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

import numpy as np


@dataclass(frozen=True)
class ChartValues:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray
    z: np.ndarray | None = None

    def __len__(self) -> int:
        return int(self.y.size)

    @property
    def gap_count(self) -> int:
        return int(np.count_nonzero(~self.mask))


@dataclass(frozen=True)
class SeriesData:
    """One category of a chart.

    ``values`` holds the series' own y-values in input order, ``aligned`` the
    same values spread over the global index with NaN for records belonging to
    other series. ``defined`` is the validity mask restricted to ``indices``.
    """

    key: Hashable | None
    indices: np.ndarray
    values: np.ndarray
    aligned: np.ndarray
    defined: np.ndarray

    def __len__(self) -> int:
        return int(self.indices.size)

    @property
    def last_valid_index(self) -> int | None:
        valid = self.indices[self.defined]
        if valid.size == 0:
            return None
        return int(valid[-1])
