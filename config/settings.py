"""
프로젝트 설정 관리 모듈
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from orbital_mechanics.bodies import CelestialBody, default_bodies, find_body
from utils.constants import (
    PHYSICS_PARAMS,
    VEHICLE_PARAMS,
    EVENT_PARAMS,
)
from utils.helpers import load_json, save_json


@dataclass
class PhysicsConfig:
    """물리 시뮬레이션 설정"""

    gravitational_constant: float = PHYSICS_PARAMS["gravitational_constant"]
    physics_step: float = PHYSICS_PARAMS["physics_step"]
    time_acceleration: float = PHYSICS_PARAMS["time_acceleration"]

    def __post_init__(self):
        if self.physics_step <= 0:
            raise ValueError(f"physics_step must be positive, got {self.physics_step}")
        if self.gravitational_constant <= 0:
            raise ValueError(
                f"gravitational_constant must be positive, got {self.gravitational_constant}"
            )


@dataclass
class VehicleConfig:
    """기체 설정"""

    mass: float = VEHICLE_PARAMS["mass"]
    drag_coefficient: float = VEHICLE_PARAMS["drag_coefficient"]
    cross_sectional_area: float = VEHICLE_PARAMS["cross_sectional_area"]
    max_thrust: float = VEHICLE_PARAMS["max_thrust"]

    def __post_init__(self):
        if self.mass <= 0:
            raise ValueError(f"Vehicle mass must be positive, got {self.mass}")
        if self.drag_coefficient < 0 or self.cross_sectional_area < 0:
            raise ValueError("Drag coefficient and cross-sectional area must be non-negative")


@dataclass
class EventConfig:
    """궤도 이벤트 판정 설정"""

    apsis_tolerance: float = EVENT_PARAMS["apsis_tolerance"]
    atmosphere_entry_altitude: float = EVENT_PARAMS["atmosphere_entry_altitude"]
    # 기본값은 조건이 유지되는 동안 매 틱 발생 (레벨 트리거)
    edge_triggered: bool = EVENT_PARAMS["edge_triggered"]


@dataclass
class SimulationConfig:
    """시뮬레이션 전체 설정"""

    bodies: List[CelestialBody] = field(default_factory=lambda: list(default_bodies()))
    primary_body: Optional[str] = None  # None이면 첫 번째 천체
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    vehicle: VehicleConfig = field(default_factory=VehicleConfig)
    events: EventConfig = field(default_factory=EventConfig)

    # 실행 설정
    log_level: str = "INFO"
    debug_mode: bool = False

    def __post_init__(self):
        """초기화 후 처리"""
        # 딕셔너리로 들어온 하위 설정 변환
        if isinstance(self.physics, dict):
            self.physics = PhysicsConfig(**self.physics)
        if isinstance(self.vehicle, dict):
            self.vehicle = VehicleConfig(**self.vehicle)
        if isinstance(self.events, dict):
            self.events = EventConfig(**self.events)
        self.bodies = [
            body if isinstance(body, CelestialBody) else CelestialBody.from_dict(body)
            for body in self.bodies
        ]

        # 주 천체 존재 확인
        find_body(self.bodies, self.primary_body)

        if self.debug_mode:
            self.log_level = "DEBUG"

    @property
    def primary(self) -> CelestialBody:
        return find_body(self.bodies, self.primary_body)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "SimulationConfig":
        """딕셔너리로부터 설정 생성"""
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            "bodies": [body.to_dict() for body in self.bodies],
            "primary_body": self.primary_body,
            "physics": self.physics.__dict__,
            "vehicle": self.vehicle.__dict__,
            "events": self.events.__dict__,
            "log_level": self.log_level,
            "debug_mode": self.debug_mode,
        }

    def save_to_file(self, filepath: str):
        """설정을 파일로 저장"""
        save_json(self.to_dict(), filepath)

    @classmethod
    def load_from_file(cls, filepath: str) -> "SimulationConfig":
        """파일로부터 설정 로드"""
        return cls.from_dict(load_json(filepath))


def get_config(
    debug_mode: bool = False,
    custom_config: Optional[Dict[str, Any]] = None,
) -> SimulationConfig:
    """설정 인스턴스 생성 및 반환"""

    config = SimulationConfig(debug_mode=debug_mode)

    if custom_config:
        for key, value in custom_config.items():
            if hasattr(config, key):
                setattr(config, key, value)
        # 변경된 값 재검증
        config.__post_init__()

    return config
