"""
엔진이 의존하는 기체 인터페이스 및 기본 우주선 구현
"""

import numpy as np
from typing import Optional, Protocol, runtime_checkable

from utils.constants import VEHICLE_PARAMS
from utils.helpers import clamp
from utils.vector_math import as_vector, safe_normalize, velocity_aligned_frame, VectorLike


@runtime_checkable
class VehicleInterface(Protocol):
    """궤도 엔진이 호스트 기체에 요구하는 최소 기능"""

    def get_position(self) -> np.ndarray: ...

    def set_position(self, position: np.ndarray) -> None: ...

    def get_velocity(self) -> np.ndarray: ...

    def set_velocity(self, velocity: np.ndarray) -> None: ...

    def get_thrust_vector(self) -> np.ndarray: ...

    def get_thrust_magnitude(self) -> float: ...


class Spacecraft:
    """
    기본 호스트 기체

    추력 명령은 [0, max_thrust]로 제한되며, 엔진이 속도를 갱신할 때마다
    기체 자세를 속도 방향 좌표계로 맞춘다.
    """

    def __init__(
        self,
        position: VectorLike,
        velocity: VectorLike,
        mass: float = VEHICLE_PARAMS["mass"],
        max_thrust: float = VEHICLE_PARAMS["max_thrust"],
    ):
        if mass <= 0:
            raise ValueError(f"Spacecraft mass must be positive, got {mass}")
        self.position = as_vector(position)
        self.velocity = as_vector(velocity)
        self.mass = mass
        self.max_thrust = max_thrust
        self.current_thrust = 0.0
        self.thrust_direction = np.array([1.0, 0.0, 0.0])
        self.attitude = np.eye(3)  # 열: right, forward, up
        self._update_attitude()

    def apply_thrust(self, thrust_amount: float, direction: Optional[VectorLike] = None):
        """
        추력 명령

        Args:
            thrust_amount: 추력 [N], [0, max_thrust]로 제한
            direction: 추력 방향. None이면 기체 전방(속도 방향)
        """
        self.current_thrust = clamp(thrust_amount, 0.0, self.max_thrust)
        if direction is not None:
            self.thrust_direction = safe_normalize(as_vector(direction))
        else:
            self.thrust_direction = self.attitude[:, 1].copy()

    def cut_thrust(self):
        self.current_thrust = 0.0

    def _update_attitude(self):
        right, forward, up = velocity_aligned_frame(self.velocity)
        self.attitude = np.column_stack((right, forward, up))

    # VehicleInterface
    def get_position(self) -> np.ndarray:
        return self.position.copy()

    def set_position(self, position: np.ndarray) -> None:
        self.position = as_vector(position)

    def get_velocity(self) -> np.ndarray:
        return self.velocity.copy()

    def set_velocity(self, velocity: np.ndarray) -> None:
        self.velocity = as_vector(velocity)
        if np.linalg.norm(self.velocity) > 0.0:
            self._update_attitude()

    def get_thrust_vector(self) -> np.ndarray:
        return self.thrust_direction.copy()

    def get_thrust_magnitude(self) -> float:
        return self.current_thrust
