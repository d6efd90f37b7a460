"""
Student's t lookup tables and p-value approximation.

Critical values are read-only constants indexed by degrees of freedom
(index 0 is unused). Beyond df=30 the asymptotic normal values apply.
"""

import math

# Two-sided 95% critical values, df 1-30
T_CRITICAL_95 = (
    0.0,
    12.706, 4.303, 3.182, 2.776, 2.571,
    2.447, 2.365, 2.306, 2.262, 2.228,
    2.201, 2.179, 2.160, 2.145, 2.131,
    2.120, 2.110, 2.101, 2.093, 2.086,
    2.080, 2.074, 2.069, 2.064, 2.060,
    2.056, 2.052, 2.048, 2.045, 2.042,
)

# One-sided 99% critical values (alpha = 0.01), df 1-30
T_CRITICAL_ONE_SIDED_99 = (
    0.0,
    31.821, 6.965, 4.541, 3.747, 3.365,
    3.143, 2.998, 2.896, 2.821, 2.764,
    2.718, 2.681, 2.650, 2.624, 2.602,
    2.583, 2.567, 2.552, 2.539, 2.528,
    2.518, 2.508, 2.500, 2.492, 2.485,
    2.479, 2.473, 2.467, 2.462, 2.457,
)

Z_CRITICAL_95 = 1.96
Z_ONE_SIDED_99 = 2.326

# (t lower bound, p-value) bands for df <= 30, checked in order
_P_VALUE_BANDS = (
    (4.0, 0.001),
    (3.0, 0.005),
    (2.5, 0.01),
    (2.0, 0.025),
    (1.5, 0.05),
    (1.0, 0.15),
)


def t_critical_95(df: int) -> float:
    """Two-sided 95% critical value; 1.96 outside df 1-30."""
    if 0 < df < len(T_CRITICAL_95):
        return T_CRITICAL_95[df]
    return Z_CRITICAL_95


def t_critical_one_sided(df: int, alpha: float) -> float:
    """
    One-sided critical value at significance level alpha.

    Only alpha=0.01 is tabulated. Every other alpha falls back to the
    asymptotic one-sided 99% z-value.
    """
    if alpha != 0.01:
        return Z_ONE_SIDED_99
    if df < 1:
        return T_CRITICAL_ONE_SIDED_99[1]
    if df < len(T_CRITICAL_ONE_SIDED_99):
        return T_CRITICAL_ONE_SIDED_99[df]
    return Z_ONE_SIDED_99


def approximate_p_value(t: float, df: int) -> float:
    """Coarse one-sided p-value for a t statistic."""
    if t <= 0:
        return 0.5
    if df > 30:
        return 0.5 * math.erfc(t / math.sqrt(2))
    for bound, p_value in _P_VALUE_BANDS:
        if t > bound:
            return p_value
    return 0.3
