"""
천체 정의 (고정 위치 인력원)
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from utils.constants import DEFAULT_BODIES


@dataclass(frozen=True)
class CelestialBody:
    """
    인력원 천체

    위치와 속도는 초기화 이후 변하지 않는다. 속도는 표시용이며
    천체 자체는 전파되지 않는다.
    """

    name: str
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    mass: float = 0.0
    radius: float = 0.0

    def __post_init__(self):
        if self.mass < 0:
            raise ValueError(f"Body '{self.name}' has negative mass {self.mass}")
        if self.radius < 0:
            raise ValueError(f"Body '{self.name}' has negative radius {self.radius}")
        # 리스트로 들어와도 불변 튜플로 고정
        object.__setattr__(self, "position", tuple(float(x) for x in self.position))
        object.__setattr__(self, "velocity", tuple(float(x) for x in self.velocity))

    @property
    def position_vector(self) -> np.ndarray:
        return np.array(self.position, dtype=np.float64)

    def gravitational_parameter(self, G: float) -> float:
        return G * self.mass

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "position": list(self.position),
            "velocity": list(self.velocity),
            "mass": self.mass,
            "radius": self.radius,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CelestialBody":
        return cls(
            name=data["name"],
            position=tuple(data.get("position", (0.0, 0.0, 0.0))),
            velocity=tuple(data.get("velocity", (0.0, 0.0, 0.0))),
            mass=data.get("mass", 0.0),
            radius=data.get("radius", 0.0),
        )


def default_bodies() -> Tuple[CelestialBody, ...]:
    """기본 천체 집합 (지구, 달, 화성, 목성, 토성)"""
    return tuple(CelestialBody.from_dict(entry) for entry in DEFAULT_BODIES)


def find_body(bodies: Iterable[CelestialBody], name: Optional[str] = None) -> CelestialBody:
    """
    이름으로 천체 검색. name이 None이면 첫 번째 천체를 반환한다.

    Raises:
        ValueError: 천체 집합이 비었거나 이름이 없는 경우
    """
    bodies = tuple(bodies)
    if not bodies:
        raise ValueError("At least one celestial body is required")
    if name is None:
        return bodies[0]
    for body in bodies:
        if body.name == name:
            return body
    raise ValueError(f"Unknown celestial body: {name!r}")


def pack_bodies(bodies: Sequence[CelestialBody], G: float) -> Tuple[np.ndarray, np.ndarray]:
    """중력 커널 입력용 (N, 3) 위치 배열과 (N,) μ 배열"""
    if not bodies:
        return np.zeros((0, 3)), np.zeros(0)
    positions = np.array([body.position for body in bodies], dtype=np.float64)
    mus = np.array([body.gravitational_parameter(G) for body in bodies], dtype=np.float64)
    return positions, mus
