"""Argument checks shared by the evaluator entry points.

Each ``ensure_*`` function returns None on success and raises
`ValidationError` (shapes, hyperparameters) or `DataError` (table values)
otherwise. Internal: the public functions call these before any likelihood
term is computed.
"""

from collections.abc import Iterable
from numbers import Integral, Real
from typing import Any

import numpy as np

from spatiotemporal_copula.exceptions import DataError, ValidationError


def ensure_positive_scalar(
    value: float, name: str, minimum: float = 0.0, strict: bool = True
) -> None:
    """Check that ``value`` is a finite real above ``minimum``.

    Parameters
    ----------
    value : float
    name : str
        Argument name used in the message.
    minimum : float, optional
        Lower bound, by default 0.0
    strict : bool, optional
        Exclude ``minimum`` itself, by default True

    Examples
    --------
    >>> ensure_positive_scalar(0.5, "bandwidth")
    >>> ensure_positive_scalar(0.0, "bandwidth", strict=False)
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(
            f"{name} must be a real number",
            expected="int or float",
            got=type(value).__name__,
        )

    relation = ">" if strict else ">="
    in_range = value > minimum if strict else value >= minimum
    if not (in_range and np.isfinite(value)):
        raise ValidationError(
            f"Invalid value for {name}",
            expected=f"{name} {relation} {minimum}",
            got=f"{name} = {value}",
            example=f"    {name} = {minimum + 1.0}",
        )


def ensure_positive_integer(value: Any, name: str) -> None:
    """Check that ``value`` is an integer >= 1 (``n_centers``, quadrature order).

    Floats are rejected even when whole, so that ``25.0`` nodes is caught
    rather than silently truncated.
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValidationError(
            f"{name} must be an integer",
            expected="int",
            got=f"{type(value).__name__} ({value!r})",
        )
    if value < 1:
        raise ValidationError(
            f"Invalid value for {name}",
            expected=f"{name} >= 1",
            got=f"{name} = {value}",
        )


def ensure_array_1d(arr: np.ndarray, name: str) -> None:
    if arr.ndim != 1:
        raise ValidationError(
            f"{name} must be a 1-dimensional array",
            expected="shape (n,)",
            got=f"shape {arr.shape}",
        )


def ensure_table_shape(arr: np.ndarray, name: str, column_names: Iterable[str]) -> None:
    """Check that ``arr`` is a 2-D table with one column per name.

    Examples
    --------
    >>> ensure_table_shape(np.zeros((3, 2)), "centers", ("longitude", "latitude"))
    """
    column_names = tuple(column_names)
    n_columns = len(column_names)
    if arr.ndim != 2 or arr.shape[1] != n_columns:
        raise ValidationError(
            f"{name} must be a table with {n_columns} columns",
            expected=f"shape (n_rows, {n_columns}): {', '.join(column_names)}",
            got=f"array with shape {arr.shape}",
            hint="Arrays are read positionally; DataFrames may use these "
            "column names in any order",
        )


def ensure_row_count(arr: np.ndarray, name: str, n_rows: int, count_name: str) -> None:
    if arr.shape[0] != n_rows:
        raise ValidationError(
            f"{name} has the wrong number of rows",
            expected=f"{n_rows} rows ({count_name})",
            got=f"{arr.shape[0]} rows",
            hint=f"{count_name} must equal the number of rows of {name}",
        )


def ensure_parameter_length(
    params: np.ndarray, expected_length: int, layout: str
) -> None:
    """Check the length of a flat parameter vector.

    Parameters
    ----------
    params : np.ndarray
    expected_length : int
    layout : str
        Description of the blocks, shown in the message.
    """
    ensure_array_1d(params, "params")
    if params.shape[0] != expected_length:
        raise ValidationError(
            "Parameter vector has the wrong length",
            expected=f"length {expected_length} ({layout})",
            got=f"length {params.shape[0]}",
            hint="Positions in the parameter vector are significant; check "
            "n_centers and the sub-model being evaluated",
        )


def ensure_all_finite(arr: np.ndarray, name: str) -> None:
    is_finite = np.isfinite(arr)
    if not np.all(is_finite):
        raise DataError(
            f"{name} contains non-finite values",
            data_name=name,
            hint=f"{np.count_nonzero(np.isnan(arr))} NaN value(s) and "
            f"{np.count_nonzero(np.isinf(arr))} Inf value(s); drop or fill "
            "missing observations before evaluating",
        )


def ensure_all_non_negative(arr: np.ndarray, name: str) -> None:
    is_negative = arr < 0
    if np.any(is_negative):
        raise DataError(
            f"{name} has {np.count_nonzero(is_negative)} negative value(s), "
            f"minimum {np.min(arr):g}",
            data_name=name,
        )


def ensure_integer_valued(arr: np.ndarray, name: str) -> None:
    is_fractional = arr != np.floor(arr)
    if np.any(is_fractional):
        idx = int(np.argmax(is_fractional))
        raise DataError(
            f"{name} must contain whole numbers",
            data_name=name,
            hint=f"Found {name}[{idx}] = {arr[idx]}. Event counts are 0 for "
            "no event and the number of events otherwise.",
        )


def ensure_one_of(value: Any, name: str, choices: Iterable[str]) -> None:
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(
            f"Invalid value for {name}",
            expected=f"one of {choices}",
            got=f"{name} = {value!r}",
        )
