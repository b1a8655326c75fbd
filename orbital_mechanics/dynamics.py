"""
기체 가속도 모델: 다중 천체 중력 + 추력 + 대기 항력 (Numba JIT)
"""

import numpy as np
from typing import Dict, Optional, Sequence
from numba import jit

from orbital_mechanics.atmosphere import drag_acceleration
from orbital_mechanics.bodies import CelestialBody, find_body, pack_bodies
from utils.constants import G as G_DEFAULT, VEHICLE_PARAMS
from utils.helpers import get_logger
from utils.vector_math import safe_normalize

logger = get_logger("dynamics")


@jit(nopython=True, cache=True)
def _gravity_core(position: np.ndarray, body_positions: np.ndarray, body_mus: np.ndarray) -> np.ndarray:
    """Core computation of summed point-mass gravity."""
    accel = np.zeros(3)
    for k in range(body_positions.shape[0]):
        dx = body_positions[k, 0] - position[0]
        dy = body_positions[k, 1] - position[1]
        dz = body_positions[k, 2] - position[2]
        d2 = dx * dx + dy * dy + dz * dz
        d = np.sqrt(d2)

        # 천체 중심과 일치하면 기여 없음
        if d > 0.0:
            scale = body_mus[k] / (d2 * d)
            accel[0] += scale * dx
            accel[1] += scale * dy
            accel[2] += scale * dz
    return accel


def gravitational_acceleration(
    position: np.ndarray, bodies: Sequence[CelestialBody], G: float = G_DEFAULT
) -> np.ndarray:
    """
    고정 천체들에 의한 중력 가속도 합

    각 천체 방향으로 G·M/d² 크기의 가속도를 더한다.

    Args:
        position: 기체 위치 [m]
        bodies: 인력원 천체 목록
        G: 만유인력 상수

    Returns:
        중력 가속도 벡터 [m/s^2]
    """
    body_positions, body_mus = pack_bodies(bodies, G)
    return _gravity_core(np.asarray(position, dtype=np.float64), body_positions, body_mus)


def thrust_acceleration(thrust_vector: np.ndarray, thrust_magnitude: float, mass: float) -> np.ndarray:
    """
    추력 가속도. thrust_vector는 방향으로만 사용된다.

    추력 크기가 0 이하이면 영벡터.
    """
    if thrust_magnitude <= 0:
        return np.zeros(3)
    direction = safe_normalize(np.asarray(thrust_vector, dtype=np.float64))
    return direction * thrust_magnitude / mass


class ForceModel:
    """중력, 추력, 항력을 합산해 틱 당 하나의 가속도를 산출"""

    def __init__(
        self,
        bodies: Sequence[CelestialBody],
        G: float = G_DEFAULT,
        primary_body: Optional[str] = None,
        drag_coefficient: float = VEHICLE_PARAMS["drag_coefficient"],
        cross_sectional_area: float = VEHICLE_PARAMS["cross_sectional_area"],
    ):
        self.bodies = tuple(bodies)
        self.G = G
        self.primary = find_body(self.bodies, primary_body)
        self.drag_coefficient = drag_coefficient
        self.cross_sectional_area = cross_sectional_area

        # 천체 집합은 불변이므로 커널 입력을 한 번만 만든다
        self._body_positions, self._body_mus = pack_bodies(self.bodies, G)

    def altitude(self, position: np.ndarray) -> float:
        """주 천체 표면 기준 고도"""
        return float(np.linalg.norm(position - self.primary.position_vector) - self.primary.radius)

    def compute_components(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
        thrust_vector: np.ndarray,
        thrust_magnitude: float,
        vehicle_mass: float,
    ) -> Dict[str, np.ndarray]:
        """
        가속도 성분별 계산

        Returns:
            {"gravity": ..., "thrust": ..., "drag": ...}

        Raises:
            ValueError: 기체 질량이 0 이하인 경우
        """
        if vehicle_mass <= 0:
            raise ValueError(f"Vehicle mass must be positive, got {vehicle_mass}")

        position = np.asarray(position, dtype=np.float64)
        velocity = np.asarray(velocity, dtype=np.float64)

        gravity = _gravity_core(position, self._body_positions, self._body_mus)
        thrust = thrust_acceleration(thrust_vector, thrust_magnitude, vehicle_mass)
        drag = drag_acceleration(
            velocity,
            self.altitude(position),
            self.drag_coefficient,
            self.cross_sectional_area,
            vehicle_mass,
        )

        if np.any(np.isnan(gravity)):
            logger.warning("NaN in gravity acceleration at position %s", position)

        return {"gravity": gravity, "thrust": thrust, "drag": drag}

    def compute_acceleration(
        self,
        state,
        thrust_vector: np.ndarray,
        thrust_magnitude: float,
        vehicle_mass: float,
    ) -> np.ndarray:
        """
        이번 틱의 총 가속도

        Args:
            state: position, velocity 속성을 가진 궤도 상태
            thrust_vector: 추력 방향 (단위 벡터)
            thrust_magnitude: 추력 크기 [N]
            vehicle_mass: 기체 질량 [kg]

        Returns:
            총 가속도 벡터 [m/s^2]
        """
        components = self.compute_components(
            state.position, state.velocity, thrust_vector, thrust_magnitude, vehicle_mass
        )
        return components["gravity"] + components["thrust"] + components["drag"]
