"""
3차원 벡터 및 회전 기본 연산
"""

import numpy as np
from typing import Sequence, Tuple, Union
from scipy.spatial.transform import Rotation

from utils.constants import NUMERICAL_STABILITY

VectorLike = Union[Sequence[float], np.ndarray]

Z_AXIS = np.array([0.0, 0.0, 1.0])


def as_vector(value: VectorLike) -> np.ndarray:
    """
    입력을 float64 3차원 벡터로 변환 (항상 새 배열을 반환)

    Raises:
        ValueError: 3차원 벡터가 아닌 경우
    """
    vec = np.array(value, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vec.shape}")
    return vec


def safe_normalize(vec: np.ndarray, eps: float = NUMERICAL_STABILITY["min_value"]) -> np.ndarray:
    """
    단위 벡터 계산. 크기가 eps 미만이면 영벡터를 반환한다.
    """
    magnitude = np.linalg.norm(vec)
    if magnitude < eps:
        return np.zeros(3)
    return np.asarray(vec, dtype=np.float64) / magnitude


def perifocal_to_inertial_matrix(RAAN: float, i: float, omega: float) -> np.ndarray:
    """
    페리포컬 좌표계에서 관성 좌표계로의 회전 행렬 (3-1-3 순서)

    R = Rz(RAAN) · Rx(i) · Rz(omega)

    Args:
        RAAN: 승교점 경도 [rad]
        i: 경사각 [rad]
        omega: 근점 인수 [rad]

    Returns:
        3x3 회전 행렬
    """
    return Rotation.from_euler("ZXZ", [RAAN, i, omega]).as_matrix()


def velocity_aligned_frame(velocity: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    속도 방향 정렬 기체 좌표계 (right, forward, up)

    forward는 속도 방향, up은 관성 +Z에 가장 가까운 직교 벡터.
    속도가 0이면 관성 기저를 그대로 반환한다.
    """
    forward = safe_normalize(velocity)
    if not forward.any():
        return np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0]), Z_AXIS.copy()

    right = safe_normalize(np.cross(forward, Z_AXIS))
    if not right.any():
        # 수직 비행: 관성 X축을 보조 up 으로 사용
        right = safe_normalize(np.cross(forward, np.array([1.0, 0.0, 0.0])))
    up = np.cross(right, forward)
    return right, forward, up
