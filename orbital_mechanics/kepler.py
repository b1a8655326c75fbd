"""
케플러 방정식 해법 및 근점이각 변환
"""

import numpy as np

from utils.constants import KEPLER_PARAMS
from utils.helpers import get_logger

logger = get_logger("kepler")


def kepler_equation(E: float, M: float, e: float) -> float:
    return E - e * np.sin(E) - M


def kepler_equation_derivative(E: float, e: float) -> float:
    return 1 - e * np.cos(E)


def solve_kepler(
    M: float,
    e: float,
    max_iter: int = KEPLER_PARAMS["max_iter"],
    tol: float = KEPLER_PARAMS["tol"],
) -> float:
    """
    Newton-Raphson으로 타원 케플러 방정식 E - e·sin(E) = M 풀이

    초기값 E0 = M. 반복 횟수는 max_iter로 제한되며, 수렴하지 못하면
    마지막 추정값을 그대로 반환한다 (예외를 던지지 않음).

    Args:
        M: 평균 근점이각 [rad]
        e: 이심률 (0 <= e < 1)

    Returns:
        이심 근점이각 E [rad]
    """
    E = M
    for _ in range(max_iter):
        f = kepler_equation(E, M, e)
        if abs(f) < tol:
            return E
        E = E - f / kepler_equation_derivative(E, e)

    if abs(kepler_equation(E, M, e)) >= tol:
        logger.debug("Kepler solver hit iteration cap: M=%.6f e=%.6f E=%.6f", M, e, E)
    return E


def solve_kepler_hyperbolic(
    M: float,
    e: float,
    max_iter: int = KEPLER_PARAMS["max_iter"],
    tol: float = KEPLER_PARAMS["tol"],
) -> float:
    """
    쌍곡선 케플러 방정식 e·sinh(H) - H = M 풀이 (Newton-Raphson)

    초기값 H0 = asinh(M/e). 반복 상한 및 비수렴 처리는 solve_kepler와 동일.

    Args:
        M: 쌍곡선 평균 근점이각
        e: 이심률 (e > 1)

    Returns:
        쌍곡선 이심 근점이각 H
    """
    H = np.arcsinh(M / e)
    for _ in range(max_iter):
        f = e * np.sinh(H) - H - M
        if abs(f) < tol:
            return H
        H = H - f / (e * np.cosh(H) - 1)

    if abs(e * np.sinh(H) - H - M) >= tol:
        logger.debug("Hyperbolic Kepler solver hit iteration cap: M=%.6f e=%.6f H=%.6f", M, e, H)
    return H


def eccentric_to_true_anomaly(E: float, e: float) -> float:
    """ν = 2·atan(√((1+e)/(1-e))·tan(E/2)), 반각 atan2 형태로 계산"""
    sin_half_E, cos_half_E = np.sin(E / 2), np.cos(E / 2)
    return float(2 * np.arctan2(np.sqrt(1 + e) * sin_half_E, np.sqrt(1 - e) * cos_half_E))


def true_to_eccentric_anomaly(f: float, e: float) -> float:
    sin_half_f, cos_half_f = np.sin(f / 2), np.cos(f / 2)
    return float(2 * np.arctan2(np.sqrt(1 - e) * sin_half_f, np.sqrt(1 + e) * cos_half_f))


def true_to_mean_anomaly(f: float, e: float) -> float:
    E = true_to_eccentric_anomaly(f, e)
    return float(E - e * np.sin(E))


def hyperbolic_to_true_anomaly(H: float, e: float) -> float:
    """ν = 2·atan(√((e+1)/(e-1))·tanh(H/2))"""
    return float(2 * np.arctan(np.sqrt((e + 1) / (e - 1)) * np.tanh(H / 2)))


def true_to_hyperbolic_anomaly(f: float, e: float) -> float:
    """
    진근점이각에서 쌍곡선 이심 근점이각으로 변환

    점근선 밖의 진근점이각(|ν| >= acos(-1/e))은 물리적으로 도달할 수 없으므로
    ValueError를 던진다.
    """
    x = np.sqrt((e - 1) / (e + 1)) * np.tan(f / 2)
    if abs(x) >= 1.0:
        raise ValueError(f"True anomaly {f:.6f} rad lies beyond the asymptote for e={e:.6f}")
    return float(2 * np.arctanh(x))


def true_to_hyperbolic_mean_anomaly(f: float, e: float) -> float:
    H = true_to_hyperbolic_anomaly(f, e)
    return float(e * np.sinh(H) - H)
