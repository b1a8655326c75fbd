"""
기체 궤도 상태
"""

import numpy as np
from dataclasses import dataclass, field

from utils.vector_math import as_vector, VectorLike


@dataclass
class OrbitalState:
    """
    위치, 속도, 가속도 (관성 좌표계, SI 단위)

    가속도는 매 틱 시작 시 0으로 초기화되며 틱 사이에 누적되지 않는다.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @classmethod
    def from_vectors(cls, position: VectorLike, velocity: VectorLike) -> "OrbitalState":
        return cls(position=as_vector(position), velocity=as_vector(velocity))

    def reset_acceleration(self):
        self.acceleration = np.zeros(3)

    @property
    def radius(self) -> float:
        return float(np.linalg.norm(self.position))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def copy(self) -> "OrbitalState":
        return OrbitalState(self.position.copy(), self.velocity.copy(), self.acceleration.copy())
