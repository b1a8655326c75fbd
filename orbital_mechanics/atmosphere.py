"""
표준 대기 밀도 모델 및 대기 항력
"""

import numpy as np
from numba import jit

from utils.constants import ATMOSPHERE_PARAMS, NUMERICAL_STABILITY

RHO0 = ATMOSPHERE_PARAMS["sea_level_density"]
LAPSE_RATE = ATMOSPHERE_PARAMS["lapse_rate"]
T0 = ATMOSPHERE_PARAMS["sea_level_temperature"]
TROPO_EXPONENT = ATMOSPHERE_PARAMS["troposphere_exponent"]
H_TROPOPAUSE = ATMOSPHERE_PARAMS["tropopause_altitude"]
H_STRATOSPHERE = ATMOSPHERE_PARAMS["stratosphere_altitude"]
SCALE_HEIGHT_LOWER = ATMOSPHERE_PARAMS["lower_stratosphere_scale_height"]
SCALE_HEIGHT_UPPER = ATMOSPHERE_PARAMS["upper_stratosphere_scale_height"]

# 층 경계 밀도 (아래층 식에서 계산하여 연속성 보장, 약 0.3639 / 0.0880 kg/m^3)
RHO_TROPOPAUSE = RHO0 * (1.0 - LAPSE_RATE * H_TROPOPAUSE / T0) ** TROPO_EXPONENT
RHO_STRATOSPHERE = RHO_TROPOPAUSE * np.exp(-(H_STRATOSPHERE - H_TROPOPAUSE) / SCALE_HEIGHT_LOWER)


@jit(nopython=True, cache=True)
def _density_core(altitude: float) -> float:
    """구간별 대기 밀도 계산 (JIT)"""
    if altitude < 0.0:
        return RHO0
    elif altitude < H_TROPOPAUSE:  # 대류권
        return RHO0 * (1.0 - LAPSE_RATE * altitude / T0) ** TROPO_EXPONENT
    elif altitude < H_STRATOSPHERE:  # 하부 성층권
        return RHO_TROPOPAUSE * np.exp(-(altitude - H_TROPOPAUSE) / SCALE_HEIGHT_LOWER)
    else:
        return RHO_STRATOSPHERE * np.exp(-(altitude - H_STRATOSPHERE) / SCALE_HEIGHT_UPPER)


def atmospheric_density(altitude: float) -> float:
    """
    고도에 따른 대기 밀도

    Args:
        altitude: 중심 천체 표면 기준 고도 [m]

    Returns:
        밀도 [kg/m^3]
    """
    return float(_density_core(float(altitude)))


def drag_acceleration(
    velocity: np.ndarray,
    altitude: float,
    drag_coefficient: float,
    cross_sectional_area: float,
    mass: float,
) -> np.ndarray:
    """
    대기 항력 가속도 a = -v̂ · ½ρ·Cd·A·|v|² / m

    Args:
        velocity: 기체 속도 벡터 [m/s]
        altitude: 고도 [m]
        drag_coefficient: 항력 계수 Cd
        cross_sectional_area: 단면적 A [m^2]
        mass: 기체 질량 [kg]

    Returns:
        항력 가속도 벡터 [m/s^2]
    """
    v_norm = np.linalg.norm(velocity)
    if v_norm < NUMERICAL_STABILITY["min_value"]:
        return np.zeros(3)

    rho = atmospheric_density(altitude)
    drag_force = 0.5 * rho * drag_coefficient * cross_sectional_area * v_norm**2
    return -(velocity / v_norm) * drag_force / mass
