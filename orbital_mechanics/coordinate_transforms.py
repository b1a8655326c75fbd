"""
좌표 변환 및 궤도 요소 변환 함수들
"""

import numpy as np
from typing import Tuple

from orbital_mechanics.elements import OrbitalElements
from utils.constants import MU_EARTH, NUMERICAL_STABILITY, TWO_PI
from utils.helpers import wrap_two_pi
from utils.vector_math import Z_AXIS, as_vector, safe_normalize, VectorLike


def state_to_orbital_elements(r_vec: VectorLike, v_vec: VectorLike,
                              mu: float = MU_EARTH) -> OrbitalElements:
    """
    위치 벡터와 속도 벡터로부터 궤도 요소 계산

    특이점 처리:
        - 비에너지 ≈ 0 (포물선): semi_major_axis = None
        - 승교점 벡터 ≈ 0 (적도 궤도): RAAN = 0, omega = 0
        - 이심률 ≈ 0 (원 궤도): omega = 0, 진근점이각 = 0 (근사값)
        - 각운동량 ≈ 0 (직선 궤도): 경사각 = 0

    Args:
        r_vec: 위치 벡터 (x, y, z) [m]
        v_vec: 속도 벡터 (vx, vy, vz) [m/s]
        mu: 중력 상수 [m^3/s^2]

    Returns:
        OrbitalElements

    Raises:
        ValueError: 위치 벡터가 영벡터인 경우
    """
    r_vec = as_vector(r_vec)
    v_vec = as_vector(v_vec)

    r = np.linalg.norm(r_vec)
    if r < NUMERICAL_STABILITY["min_value"]:
        raise ValueError("Position vector is zero; orbital elements are undefined")

    # 궤도 각운동량 벡터
    h_vec = np.cross(r_vec, v_vec)
    h = np.linalg.norm(h_vec)
    h_hat = safe_normalize(h_vec)

    # 이심률 벡터 및 이심률
    e_vec = np.cross(v_vec, h_vec) / mu - r_vec / r
    e = float(np.linalg.norm(e_vec))

    # 비에너지에서 반장축 계산
    v2 = float(np.dot(v_vec, v_vec))
    energy = v2 / 2.0 - mu / r
    if abs(energy) * r / mu < NUMERICAL_STABILITY["parabolic_energy"]:
        a = None
    else:
        a = float(-mu / (2.0 * energy))

    # 궤도 경사각
    if h < NUMERICAL_STABILITY["min_value"]:
        i = 0.0
    else:
        i = float(np.arccos(np.clip(np.dot(h_hat, Z_AXIS), -1.0, 1.0)))

    # 승교점 벡터
    n_vec = np.cross(Z_AXIS, h_vec)
    n = np.linalg.norm(n_vec)
    equatorial = h < NUMERICAL_STABILITY["min_value"] or n / h < NUMERICAL_STABILITY["equatorial_node"]
    circular = e < NUMERICAL_STABILITY["circular_eccentricity"]

    if equatorial:  # 적도 궤도
        RAAN = 0.0
        omega = 0.0
    else:
        RAAN = wrap_two_pi(np.arctan2(n_vec[1], n_vec[0]))
        if circular:  # 원 궤도
            omega = 0.0
        else:
            cos_omega = np.clip(np.dot(n_vec / n, e_vec / e), -1.0, 1.0)
            omega = float(np.arccos(cos_omega))
            if e_vec[2] < 0:
                omega = TWO_PI - omega
            omega = wrap_two_pi(omega)

    # 진근점이각 (f)
    if circular:
        f = 0.0
    else:
        e_hat = e_vec / e
        r_hat = r_vec / r
        cos_f = np.dot(e_hat, r_hat)
        sin_f = np.dot(np.cross(e_hat, r_hat), h_hat)
        f = float(np.arctan2(sin_f, cos_f))

    return OrbitalElements(
        semi_major_axis=a,
        eccentricity=e,
        inclination=i,
        argument_of_periapsis=omega,
        longitude_of_ascending_node=RAAN,
        true_anomaly=f,
    )


def orbital_elements_to_state(elements: OrbitalElements,
                              mu: float = MU_EARTH) -> Tuple[np.ndarray, np.ndarray]:
    """
    궤도 요소에서 위치/속도 벡터로 변환 (기준 시각에서의 상태)

    적도 궤도(Ω=ω=0)나 원 궤도(ω=ν=0)의 대체값은 궤도면 내 방향 정보를
    잃으므로, 이런 요소에서 복원한 상태는 궤도면 법선 축 회전만큼 원래 상태와
    다를 수 있다 (반경, 속력, 비행 경로각은 같음).

    Args:
        elements: 궤도 요소
        mu: 중력 상수

    Returns:
        관성 좌표계 위치, 속도
    """
    # 순환 import 방지
    from orbital_mechanics.orbit import propagate

    return propagate(elements, 0.0, mu)


def specific_orbital_energy(r_vec: VectorLike, v_vec: VectorLike, mu: float = MU_EARTH) -> float:
    """비궤도 에너지 ε = v²/2 - μ/r"""
    r_vec = as_vector(r_vec)
    v_vec = as_vector(v_vec)
    return float(np.dot(v_vec, v_vec) / 2.0 - mu / np.linalg.norm(r_vec))


def escape_velocity(radius: float, mu: float = MU_EARTH) -> float:
    """탈출 속도 √(2μ/r)"""
    if radius <= 0:
        raise ValueError(f"Radius must be positive, got {radius}")
    return float(np.sqrt(2.0 * mu / radius))
