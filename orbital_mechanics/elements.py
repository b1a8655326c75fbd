"""
궤도 요소 및 전이 궤도 데이터 타입
"""

import numpy as np
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from utils.constants import NUMERICAL_STABILITY


class UnsupportedRegimeError(ValueError):
    """해석적 전파를 지원하지 않는 궤도 영역 (포물선 궤도)"""

    def __init__(self, regime: "OrbitRegime", message: Optional[str] = None):
        self.regime = regime
        super().__init__(message or f"Propagation is not supported for {regime.value} orbits")


class OrbitRegime(Enum):
    """이심률에 따른 궤도 분류"""

    ELLIPTIC = "elliptic"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"


@dataclass(frozen=True)
class OrbitalElements:
    """
    고전 궤도 요소

    semi_major_axis 부호 규약:
        > 0  타원 궤도
        < 0  쌍곡선 궤도
        None 포물선 궤도 (비에너지 0, 반장축 정의되지 않음)

    Attributes:
        semi_major_axis: 반장축 [m]
        eccentricity: 이심률 (>= 0)
        inclination: 경사각 [rad], [0, π]
        argument_of_periapsis: 근점 인수 [rad], [0, 2π)
        longitude_of_ascending_node: 승교점 경도 [rad], [0, 2π)
        true_anomaly: 진근점이각 [rad], (-π, π]
    """

    semi_major_axis: Optional[float]
    eccentricity: float
    inclination: float
    argument_of_periapsis: float
    longitude_of_ascending_node: float
    true_anomaly: float

    @property
    def regime(self) -> OrbitRegime:
        tol = NUMERICAL_STABILITY["parabolic_eccentricity"]
        if self.semi_major_axis is None or abs(self.eccentricity - 1.0) <= tol:
            return OrbitRegime.PARABOLIC
        if self.eccentricity < 1.0:
            return OrbitRegime.ELLIPTIC
        return OrbitRegime.HYPERBOLIC

    @property
    def axis_defined(self) -> bool:
        return self.semi_major_axis is not None

    @property
    def periapsis_radius(self) -> Optional[float]:
        if self.semi_major_axis is None:
            return None
        return self.semi_major_axis * (1.0 - self.eccentricity)

    @property
    def apoapsis_radius(self) -> Optional[float]:
        """원지점 반경. 타원 궤도에서만 정의된다."""
        if self.regime is not OrbitRegime.ELLIPTIC:
            return None
        return self.semi_major_axis * (1.0 + self.eccentricity)

    @property
    def semi_latus_rectum(self) -> Optional[float]:
        if self.semi_major_axis is None:
            return None
        return self.semi_major_axis * (1.0 - self.eccentricity**2)

    def mean_motion(self, mu: float) -> float:
        """평균 운동 [rad/s]. 포물선 궤도에서는 0."""
        if self.semi_major_axis is None:
            return 0.0
        return float(np.sqrt(mu / abs(self.semi_major_axis) ** 3))

    def period(self, mu: float) -> float:
        """궤도 주기 [s]. 반장축이 0 이하이거나 정의되지 않으면 0."""
        if self.semi_major_axis is None or self.semi_major_axis <= 0:
            return 0.0
        return float(2 * np.pi * np.sqrt(self.semi_major_axis**3 / mu))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrbitalElements":
        return cls(**data)

    def __str__(self) -> str:
        a_str = "undefined" if self.semi_major_axis is None else f"{self.semi_major_axis/1000:.2f}km"
        return (f"OrbitalElements(a={a_str}, e={self.eccentricity:.6f}, "
                f"i={np.degrees(self.inclination):.2f}°, "
                f"RAAN={np.degrees(self.longitude_of_ascending_node):.2f}°, "
                f"ω={np.degrees(self.argument_of_periapsis):.2f}°, "
                f"ν={np.degrees(self.true_anomaly):.2f}°)")


@dataclass(frozen=True)
class TransferOrbit:
    """
    호만 전이 궤도 계산 결과

    Attributes:
        semi_major_axis: 전이 궤도 반장축 [m]
        eccentricity: 전이 궤도 이심률 (목표가 안쪽이면 음수)
        transfer_time: 전이 시간 (전이 궤도 반주기) [s]
        delta_v: 출발 분사량 v_transfer - v_circular [m/s] (부호 포함)
        arrival_delta_v: 도착 원궤도화 분사량 [m/s] (부호 포함)
    """

    semi_major_axis: float
    eccentricity: float
    transfer_time: float
    delta_v: float
    arrival_delta_v: float = 0.0

    @property
    def total_delta_v(self) -> float:
        return abs(self.delta_v) + abs(self.arrival_delta_v)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
