import numpy as np


def round_half_up(values, decimals: int = 1):
    """
    Round non-negative values with ties going up (0.25 -> 0.3), the way the
    dashboard displays them. numpy/pandas `round` sends ties to the even digit.

    Works on scalars, numpy arrays and pandas Series (returns the same kind).
    """
    scale = 10.0 ** decimals
    return np.floor(values * scale + 0.5) / scale
