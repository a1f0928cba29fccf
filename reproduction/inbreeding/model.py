"""Core model equations for inbreeding invasion under parental care."""

from typing import Mapping, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]


def validate_params(params: Mapping[str, object]) -> bool:
    """Validate that every named parameter column is a proportion in [0, 1].

    Accepts any mapping of name to values, including a grid DataFrame.

    Raises:
        ValueError: If any value lies outside the unit interval
    """
    for name in params:
        values = np.asarray(params[name], dtype=float)
        bad = values[~((values >= 0.0) & (values <= 1.0))]
        if bad.size:
            raise ValueError(f"{name} = {bad[0]} must lie in [0, 1]")
    return True


def reproductive_output(depression: ArrayLike, alpha: ArrayLike, care: ArrayLike) -> ArrayLike:
    """Inbred offspring fitness: 1 - δ(1 - αc)."""

    return 1.0 - depression * (1.0 - alpha * care)


def _care_denominator(r: ArrayLike, alpha: ArrayLike, cost_male: ArrayLike) -> ArrayLike:
    # 1 + r - w*a - w*r*a with w = (1 + N_m)/2, factored so that it is exactly
    # zero at a = 1, N_m = 1
    weight = (1.0 + cost_male) / 2.0
    return (1.0 + r) * (1.0 - weight * alpha)


def _divide(numerator: ArrayLike, denominator: ArrayLike) -> ArrayLike:
    # 0/0 at alpha = 1, cost_male = 1 evaluates to NaN
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.true_divide(numerator, denominator)


def depression_threshold_female(r: ArrayLike, alpha: ArrayLike) -> ArrayLike:
    """Maximum δ for which a female inbreeding allele invades (no male care)."""

    return _divide(r, _care_denominator(r, alpha, 0.0))


def depression_threshold_male(r: ArrayLike, alpha: ArrayLike) -> ArrayLike:
    """Maximum δ for which a male inbreeding allele invades (no male care)."""

    return _divide(1.0, _care_denominator(r, alpha, 0.0))


def care_threshold_female(r: ArrayLike, alpha: ArrayLike, cost_male: ArrayLike) -> ArrayLike:
    """Female threshold when the male also cares at cost ΔN_m."""

    return _divide(r - r * cost_male, _care_denominator(r, alpha, cost_male))


def care_threshold_male(r: ArrayLike, alpha: ArrayLike, cost_male: ArrayLike) -> ArrayLike:
    """Male threshold when the male also cares at cost ΔN_m."""

    return _divide(1.0 - cost_male, _care_denominator(r, alpha, cost_male))


def control_threshold_female(r: ArrayLike) -> ArrayLike:
    """Control condition r/(1+r): no male care and no care effect."""

    return _divide(r, 1.0 + r)


def control_threshold_male(r: ArrayLike) -> ArrayLike:
    """Control condition 1/(1+r)."""

    return _divide(1.0, 1.0 + r)


def care_threshold_limit_female(r: ArrayLike) -> ArrayLike:
    """Female care threshold at α = 1 for any ΔN_m < 1: 2r/(1+r)."""

    return _divide(2.0 * r, 1.0 + r)


def care_threshold_limit_male(r: ArrayLike) -> ArrayLike:
    """Male care threshold at α = 1 for any ΔN_m < 1: 2/(1+r)."""

    return _divide(2.0, 1.0 + r)


def alpha_threshold(cost_male: ArrayLike) -> ArrayLike:
    """Care effectiveness above which male care raises the tolerated δ.

    Solving care_threshold > control_threshold for α gives
    α > 2ΔN_m / (1 + ΔN_m), independently of r.
    """
    return _divide(2.0 * cost_male, 1.0 + cost_male)


def care_beats_control(r: ArrayLike, alpha: ArrayLike, cost_male: ArrayLike) -> ArrayLike:
    """True where the female care threshold exceeds the control threshold."""

    return care_threshold_female(r, alpha, cost_male) > control_threshold_female(r)
