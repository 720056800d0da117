"""Exceptions raised by spatiotemporal_copula.

The likelihood evaluators are called repeatedly by an optimizer, so the
numerical path does not raise: degenerate occurrence probabilities are
clamped and non-finite joint terms are left out of the sum. Exceptions mark
inputs that cannot be evaluated at all, and are raised at the boundary
before any likelihood term is computed.

Which exception to expect
-------------------------
ValidationError
    Wrong shapes or hyperparameters: a parameter vector whose length does
    not match ``n_centers``, a center table with the wrong row count, a
    bandwidth <= 0, a quadrature order < 1, an unknown ``event_rule``.
DataError
    Bad values inside the observation or center tables: NaN coordinates or
    times, negative or fractional event counts.
ConfigurationError
    A `ModelConfig` or objective that cannot be assembled, such as an
    unknown objective kind.
NumericalError, ConvergenceError
    The Legendre root finder did not converge.

Every class derives from `SpatioTemporalCopulaError`.

Examples
--------
>>> from spatiotemporal_copula import SpatioTemporalCopulaError, nllk_occurrence
>>> try:
...     nllk_occurrence([0.0] * 5, [[0.0, 1, 0.0, 0.0]], [[0.0, 0.0]], 1, 1.0)
... except SpatioTemporalCopulaError as error:
...     print(type(error).__name__)
ValidationError
"""


def _with_hint(message: str, hint: str | None) -> str:
    return message if hint is None else f"{message}\n\nHint: {hint}"


class SpatioTemporalCopulaError(Exception):
    """Common base of every error raised by this package."""


class ValidationError(SpatioTemporalCopulaError):
    """An argument has the wrong shape, type or range.

    The message is assembled from optional parts so that the reader sees
    what was passed next to what the evaluator needs.

    Parameters
    ----------
    message : str
    expected : str, optional
        Requirement that was violated, e.g. ``"length 8 (n_centers + 5)"``.
    got : str, optional
        What was received instead.
    hint : str, optional
        How to fix the call.
    example : str, optional
        A corrected call, indented as code.

    Examples
    --------
    >>> print(ValidationError(
    ...     "centers has the wrong number of rows",
    ...     expected="3 rows (n_centers)",
    ...     got="4 rows",
    ... ))
    centers has the wrong number of rows
    <BLANKLINE>
    Expected: 3 rows (n_centers)
    Got: 4 rows
    """

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        got: str | None = None,
        hint: str | None = None,
        example: str | None = None,
    ):
        lines = [message]
        if expected is not None:
            lines.append(f"\nExpected: {expected}")
        if got is not None:
            lines.append(f"Got: {got}")
        if hint is not None:
            lines.append(f"\nHint: {hint}")
        if example is not None:
            lines.append(f"\nExample:\n{example}")
        super().__init__("\n".join(lines))


class NumericalError(SpatioTemporalCopulaError):
    """A numerical routine failed to produce a usable value."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(_with_hint(message, hint))


class ConfigurationError(SpatioTemporalCopulaError):
    """Options that cannot be combined into a model or objective.

    Examples
    --------
    >>> print(ConfigurationError("Unknown kind 'marginal'", hint="Use 'joint'"))
    Unknown kind 'marginal'
    <BLANKLINE>
    Hint: Use 'joint'
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(_with_hint(message, hint))


class ConvergenceError(NumericalError):
    """Newton iteration for the Legendre roots did not settle.

    Parameters
    ----------
    message : str
    iterations : int, optional
        Iterations spent before giving up.
    tolerance : float, optional
        Step size below which a root counts as converged.
    hint : str, optional
    """

    def __init__(
        self,
        message: str,
        iterations: int | None = None,
        tolerance: float | None = None,
        hint: str | None = None,
    ) -> None:
        if iterations is not None:
            message += f" (iterations: {iterations})"
        if tolerance is not None:
            message += f" (tolerance: {tolerance})"
        super().__init__(message, hint=hint)


class DataError(SpatioTemporalCopulaError):
    """Values in an observation or center table cannot be used.

    Parameters
    ----------
    message : str
    data_name : str, optional
        Column or table holding the bad values, e.g. ``"count"``.
    hint : str, optional
    """

    def __init__(
        self, message: str, data_name: str | None = None, hint: str | None = None
    ) -> None:
        if data_name is not None:
            message += f" (data: {data_name})"
        super().__init__(_with_hint(message, hint))
