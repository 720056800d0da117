"""Coercion of observation and center tables into numpy arrays.

Callers hand over either plain 2-D arrays whose columns follow the fixed
order below, or ``pandas.DataFrame`` objects. Named columns are used when a
frame carries all of them, otherwise columns are read positionally.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from spatiotemporal_copula import _validation as val

OBSERVATION_COLUMNS = ("time", "count", "longitude", "latitude")
CENTER_COLUMNS = ("longitude", "latitude")

__all__ = [
    "OBSERVATION_COLUMNS",
    "CENTER_COLUMNS",
    "ObservationTable",
    "as_observation_table",
    "as_center_array",
]


def _to_float_table(table, column_names: tuple[str, ...], name: str) -> np.ndarray:
    if isinstance(table, pd.DataFrame):
        if all(column in table.columns for column in column_names):
            table = table.loc[:, list(column_names)]
        table = table.to_numpy(dtype=float)
    else:
        table = np.asarray(table, dtype=float)
    val.ensure_table_shape(table, name, column_names)
    return table


@dataclass(frozen=True, eq=False)
class ObservationTable:
    """Space-time observations, one entry per site and time period.

    Attributes
    ----------
    time : np.ndarray, shape (n_observations,)
        Time index in months.
    count : np.ndarray, shape (n_observations,)
        0 for no event, otherwise the number of events.
    longitude : np.ndarray, shape (n_observations,)
    latitude : np.ndarray, shape (n_observations,)
    """

    time: np.ndarray
    count: np.ndarray
    longitude: np.ndarray
    latitude: np.ndarray

    @property
    def n_observations(self) -> int:
        return self.time.shape[0]

    @classmethod
    def from_array(cls, table) -> "ObservationTable":
        """Build from an array-like with columns time, count, longitude, latitude."""
        table = _to_float_table(table, OBSERVATION_COLUMNS, "data")
        time, count, longitude, latitude = (np.array(column) for column in table.T)
        val.ensure_all_finite(time, "time")
        val.ensure_all_finite(longitude, "longitude")
        val.ensure_all_finite(latitude, "latitude")
        val.ensure_all_finite(count, "count")
        val.ensure_all_non_negative(count, "count")
        val.ensure_integer_valued(count, "count")

        for column in (time, count, longitude, latitude):
            column.setflags(write=False)
        return cls(time=time, count=count, longitude=longitude, latitude=latitude)

    def to_frame(self) -> pd.DataFrame:
        """Return the observations as a DataFrame with named columns."""
        return pd.DataFrame(
            {
                "time": self.time,
                "count": self.count.astype(int),
                "longitude": self.longitude,
                "latitude": self.latitude,
            }
        )


def as_observation_table(data) -> ObservationTable:
    """Coerce ``data`` into an `ObservationTable`.

    Parameters
    ----------
    data : ObservationTable, pd.DataFrame or array-like, shape (n_observations, 4)

    Returns
    -------
    observations : ObservationTable
    """
    if isinstance(data, ObservationTable):
        return data
    return ObservationTable.from_array(data)


def as_center_array(centers, n_centers: int) -> np.ndarray:
    """Coerce the kernel-center table and check it has ``n_centers`` rows.

    Parameters
    ----------
    centers : pd.DataFrame or array-like, shape (n_centers, 2)
        Longitude and latitude of each kernel center.
    n_centers : int

    Returns
    -------
    centers : np.ndarray, shape (n_centers, 2)
    """
    val.ensure_positive_integer(n_centers, "n_centers")
    centers = _to_float_table(centers, CENTER_COLUMNS, "centers")
    val.ensure_row_count(centers, "centers", n_centers, "n_centers")
    val.ensure_all_finite(centers, "centers")
    return centers
