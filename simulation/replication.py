"""
원격 관찰자용 궤도 상태 직렬화

전송 방식은 호스트 담당이며, 여기서는 복제할 최소 필드 집합만 다룬다.
"""

import json
import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Optional

from utils.vector_math import as_vector

REPLICATED_FIELDS = ("position", "velocity", "semi_major_axis", "eccentricity", "inclination")


@dataclass(frozen=True)
class ReplicatedOrbitState:
    """
    복제 필드: 위치, 속도, 반장축, 이심률, 경사각

    semi_major_axis가 None이면 포물선 궤도(반장축 정의되지 않음).
    """

    position: np.ndarray
    velocity: np.ndarray
    semi_major_axis: Optional[float]
    eccentricity: float
    inclination: float


def serialize_orbit_state(engine) -> Dict[str, Any]:
    """엔진 상태를 복제용 딕셔너리로 변환"""
    elements = engine.elements
    return {
        "position": engine.position.tolist(),
        "velocity": engine.velocity.tolist(),
        "semi_major_axis": None if elements is None else elements.semi_major_axis,
        "eccentricity": 0.0 if elements is None else elements.eccentricity,
        "inclination": 0.0 if elements is None else elements.inclination,
    }


def deserialize_orbit_state(data: Dict[str, Any]) -> ReplicatedOrbitState:
    """
    복제 딕셔너리 복원

    Raises:
        ValueError: 필드가 누락된 경우
    """
    missing = [name for name in REPLICATED_FIELDS if name not in data]
    if missing:
        raise ValueError(f"Missing replicated fields: {', '.join(missing)}")

    semi_major_axis = data["semi_major_axis"]
    return ReplicatedOrbitState(
        position=as_vector(data["position"]),
        velocity=as_vector(data["velocity"]),
        semi_major_axis=None if semi_major_axis is None else float(semi_major_axis),
        eccentricity=float(data["eccentricity"]),
        inclination=float(data["inclination"]),
    )


def to_json(engine) -> str:
    return json.dumps(serialize_orbit_state(engine))


def from_json(payload: str) -> ReplicatedOrbitState:
    return deserialize_orbit_state(json.loads(payload))
