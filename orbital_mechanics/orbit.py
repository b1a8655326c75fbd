"""
케플러 궤도 해석적 전파
"""

import numpy as np
from typing import Dict, Optional, Tuple

from orbital_mechanics.coordinate_transforms import state_to_orbital_elements
from orbital_mechanics.elements import OrbitalElements, OrbitRegime, UnsupportedRegimeError
from orbital_mechanics.kepler import (
    solve_kepler,
    solve_kepler_hyperbolic,
    eccentric_to_true_anomaly,
    hyperbolic_to_true_anomaly,
    true_to_mean_anomaly,
    true_to_hyperbolic_mean_anomaly,
)
from utils.constants import MU_EARTH
from utils.helpers import wrap_angle
from utils.vector_math import as_vector, perifocal_to_inertial_matrix, VectorLike


def mean_anomaly_at(elements: OrbitalElements, elapsed: float, mu: float) -> float:
    """
    기준 시각으로부터 elapsed 초 후의 평균 근점이각

    기준 시각의 평균 근점이각은 궤도 요소의 진근점이각에서 구한다.
    타원 궤도는 [-π, π)로 래핑된다.
    """
    e = elements.eccentricity
    n = elements.mean_motion(mu)
    regime = elements.regime
    if regime is OrbitRegime.ELLIPTIC:
        M0 = true_to_mean_anomaly(elements.true_anomaly, e)
        return float(wrap_angle(M0 + n * elapsed))
    if regime is OrbitRegime.HYPERBOLIC:
        M0 = true_to_hyperbolic_mean_anomaly(elements.true_anomaly, e)
        return float(M0 + n * elapsed)
    raise UnsupportedRegimeError(regime)


def true_anomaly_at(elements: OrbitalElements, elapsed: float, mu: float) -> float:
    """기준 시각으로부터 elapsed 초 후의 진근점이각"""
    e = elements.eccentricity
    M = mean_anomaly_at(elements, elapsed, mu)
    if elements.regime is OrbitRegime.ELLIPTIC:
        if e == 0.0:
            return M
        return eccentric_to_true_anomaly(solve_kepler(M, e), e)
    return hyperbolic_to_true_anomaly(solve_kepler_hyperbolic(M, e), e)


def perifocal_state(elements: OrbitalElements, f: float,
                    mu: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    진근점이각 f에서의 궤도면 내 위치/속도

    속도는 √(μ/p)·(-sin f, e + cos f, 0) 으로 vis-viva 식과 일치한다.
    """
    e = elements.eccentricity
    p = elements.semi_latus_rectum
    r_mag = p / (1 + e * np.cos(f))
    r_pf = np.array([r_mag * np.cos(f), r_mag * np.sin(f), 0.0])
    v_mag = np.sqrt(mu / p)
    v_pf = np.array([-v_mag * np.sin(f), v_mag * (e + np.cos(f)), 0.0])
    return r_pf, v_pf


def propagate(elements: OrbitalElements, elapsed: float,
              mu: float = MU_EARTH) -> Tuple[np.ndarray, np.ndarray]:
    """
    궤도 요소를 elapsed 초만큼 전파하여 관성 좌표계 위치/속도 반환

    elapsed는 틱 간격이 아니라 궤도 요소가 마지막으로 재계산된 시각(epoch)부터
    측정한 시간이다. 적도/원 궤도의 대체값(Ω=ω=0, ν=0)이 들어간 요소는
    기준 방향을 +X축에 둔 궤도로 해석된다. 실제 상태에서 전파하려면
    propagate_state를 사용한다.

    Args:
        elements: 기준 시각의 궤도 요소
        elapsed: 기준 시각으로부터 경과 시간 [s]
        mu: 중심 천체 중력 상수 [m^3/s^2]

    Returns:
        (r_eci, v_eci)

    Raises:
        UnsupportedRegimeError: 포물선 궤도 (반장축 정의되지 않음)
    """
    if elements.regime is OrbitRegime.PARABOLIC:
        raise UnsupportedRegimeError(OrbitRegime.PARABOLIC)

    f = true_anomaly_at(elements, elapsed, mu)
    r_pf, v_pf = perifocal_state(elements, f, mu)

    R = perifocal_to_inertial_matrix(
        elements.longitude_of_ascending_node,
        elements.inclination,
        elements.argument_of_periapsis,
    )
    return R @ r_pf, R @ v_pf


def propagate_state(r_vec: VectorLike, v_vec: VectorLike, elapsed: float,
                    mu: float = MU_EARTH) -> Tuple[np.ndarray, np.ndarray]:
    """
    위치/속도에서 elapsed 초 후의 상태를 라그랑주 f, g 계수로 전파

    적도 궤도(Ω=ω=0)나 원 궤도(ω=ν=0)의 궤도 요소 대체값을 거치지 않으므로
    궤도면 내 실제 방향이 유지된다.

    Args:
        r_vec: 중심 천체 기준 위치 [m]
        v_vec: 속도 [m/s]
        elapsed: 경과 시간 [s]
        mu: 중심 천체 중력 상수 [m^3/s^2]

    Returns:
        (r, v)

    Raises:
        UnsupportedRegimeError: 포물선 궤도
    """
    r0_vec = as_vector(r_vec)
    v0_vec = as_vector(v_vec)
    elements = state_to_orbital_elements(r0_vec, v0_vec, mu)
    if elements.regime is OrbitRegime.PARABOLIC:
        raise UnsupportedRegimeError(OrbitRegime.PARABOLIC)
    if elapsed == 0.0:
        return r0_vec.copy(), v0_vec.copy()

    a = elements.semi_major_axis
    e = elements.eccentricity
    r0 = np.linalg.norm(r0_vec)
    sigma = np.dot(r0_vec, v0_vec)

    if elements.regime is OrbitRegime.ELLIPTIC:
        sqrt_mu_a = np.sqrt(mu * a)
        e_cos_E0 = 1.0 - r0 / a
        e_sin_E0 = sigma / sqrt_mu_a
        E0 = np.arctan2(e_sin_E0, e_cos_E0)
        M = E0 - e_sin_E0 + np.sqrt(mu / a**3) * elapsed
        # 여러 주기를 지나도 ΔE는 래핑하지 않음
        M_wrapped = wrap_angle(M)
        dE = solve_kepler(M_wrapped, e) + (M - M_wrapped) - E0

        r = a * (1.0 - e_cos_E0 * np.cos(dE) + e_sin_E0 * np.sin(dE))
        f = 1.0 - a / r0 * (1.0 - np.cos(dE))
        g = elapsed - np.sqrt(a**3 / mu) * (dE - np.sin(dE))
        f_dot = -sqrt_mu_a / (r * r0) * np.sin(dE)
        g_dot = 1.0 - a / r * (1.0 - np.cos(dE))
    else:
        sqrt_mu_a = np.sqrt(-mu * a)
        e_cosh_H0 = 1.0 - r0 / a
        e_sinh_H0 = sigma / sqrt_mu_a
        H0 = np.arcsinh(e_sinh_H0 / e)
        M = e_sinh_H0 - H0 + np.sqrt(mu / (-a) ** 3) * elapsed
        dH = solve_kepler_hyperbolic(M, e) - H0

        r = a * (1.0 - e_cosh_H0 * np.cosh(dH) - e_sinh_H0 * np.sinh(dH))
        f = 1.0 - a / r0 * (1.0 - np.cosh(dH))
        g = elapsed - np.sqrt((-a) ** 3 / mu) * (np.sinh(dH) - dH)
        f_dot = -sqrt_mu_a / (r * r0) * np.sinh(dH)
        g_dot = 1.0 - a / r * (1.0 - np.cosh(dH))

    return f * r0_vec + g * v0_vec, f_dot * r0_vec + g_dot * v0_vec


class KeplerOrbit:
    """기준 시각(epoch)에 고정된 케플러 궤도"""

    def __init__(self, elements: OrbitalElements, mu: float = MU_EARTH, epoch_time: float = 0.0):
        self.elements = elements
        self.mu = mu
        self.epoch_time = epoch_time  # 궤도 요소가 정의된 시각
        self.n = elements.mean_motion(mu)
        self.period = elements.period(mu)
        self.reference_state: Optional[Tuple[np.ndarray, np.ndarray]] = None  # epoch 시각의 (r, v)

    @classmethod
    def from_state(cls, r_vec: VectorLike, v_vec: VectorLike,
                   mu: float = MU_EARTH, epoch_time: float = 0.0) -> "KeplerOrbit":
        r_vec = as_vector(r_vec)
        v_vec = as_vector(v_vec)
        orbit = cls(state_to_orbital_elements(r_vec, v_vec, mu), mu, epoch_time)
        orbit.reference_state = (r_vec.copy(), v_vec.copy())
        return orbit

    @property
    def regime(self) -> OrbitRegime:
        return self.elements.regime

    def get_M(self, t: float) -> float:
        return mean_anomaly_at(self.elements, t - self.epoch_time, self.mu)

    def get_E(self, t: float) -> float:
        """이심 근점이각 (쌍곡선 궤도에서는 쌍곡선 이심 근점이각)"""
        M = self.get_M(t)
        if self.regime is OrbitRegime.ELLIPTIC:
            return solve_kepler(M, self.elements.eccentricity)
        return solve_kepler_hyperbolic(M, self.elements.eccentricity)

    def get_f(self, t: float) -> float:
        return true_anomaly_at(self.elements, t - self.epoch_time, self.mu)

    def true_anomaly_rate(self, t: float) -> float:
        """
        진근점이각 변화율 df/dt = √(μ/p³)·(1 + e·cos f)²

        타원 궤도에서는 n·(1 + e·cos f)² / (1 - e²)^1.5 와 같다.
        """
        if self.regime is OrbitRegime.PARABOLIC:
            raise UnsupportedRegimeError(OrbitRegime.PARABOLIC)
        f = self.get_f(t)
        p = self.elements.semi_latus_rectum
        e = self.elements.eccentricity
        return float(np.sqrt(self.mu / p**3) * (1 + e * np.cos(f)) ** 2)

    def get_state(self, t: float) -> Dict[str, float]:
        f = self.get_f(t)
        e = self.elements.eccentricity
        p = self.elements.semi_latus_rectum
        r0 = p / (1 + e * np.cos(f))
        dot_r0 = np.sqrt(self.mu / p) * e * np.sin(f)
        return {"r0": float(r0), "dot_r0": float(dot_r0), "f": f,
                "dot_f": self.true_anomaly_rate(t)}

    def get_position_velocity(self, t: float) -> Tuple[np.ndarray, np.ndarray]:
        if self.reference_state is not None:
            r_vec, v_vec = self.reference_state
            return propagate_state(r_vec, v_vec, t - self.epoch_time, self.mu)
        return propagate(self.elements, t - self.epoch_time, self.mu)

    def __str__(self) -> str:
        return f"KeplerOrbit({self.elements}, epoch={self.epoch_time:.3f}s)"

    def __repr__(self) -> str:
        return self.__str__()
