"""
호만 전이 궤도 계산
"""

import numpy as np

from orbital_mechanics.elements import TransferOrbit
from utils.constants import MU_EARTH
from utils.helpers import get_logger
from utils.vector_math import as_vector, VectorLike

logger = get_logger("transfer")


def plan_hohmann_transfer(current_position: VectorLike, target_position: VectorLike,
                          mu: float = MU_EARTH) -> TransferOrbit:
    """
    두 원궤도 사이 호만 전이 계산 (동일 평면 가정)

    두 위치 벡터의 크기만 사용하며 궤도면 변경 비용은 고려하지 않는다.
    결과만 계산하고 기동을 실행하지는 않는다.

    Equations:
        a_t = (r1 + r2) / 2
        e_t = (r2 - r1) / (r2 + r1)
        v1 = √(μ/r1),  v_t1 = √(μ(2/r1 - 1/a_t))
        delta_v = v_t1 - v1
        transfer_time = π√(a_t³/μ)

    Args:
        current_position: 현재 위치 [m]
        target_position: 목표 궤도 위치 [m]
        mu: 중심 천체 중력 상수 [m^3/s^2]

    Returns:
        TransferOrbit

    Raises:
        ValueError: 위치 벡터 크기가 0인 경우
    """
    r1 = float(np.linalg.norm(as_vector(current_position)))
    r2 = float(np.linalg.norm(as_vector(target_position)))
    if r1 <= 0 or r2 <= 0:
        raise ValueError(f"Transfer radii must be positive, got r1={r1}, r2={r2}")

    a_transfer = (r1 + r2) / 2.0
    e_transfer = (r2 - r1) / (r2 + r1)

    v_circ_1 = np.sqrt(mu / r1)
    v_circ_2 = np.sqrt(mu / r2)
    v_transfer_departure = np.sqrt(mu * (2.0 / r1 - 1.0 / a_transfer))
    v_transfer_arrival = np.sqrt(mu * (2.0 / r2 - 1.0 / a_transfer))

    delta_v = v_transfer_departure - v_circ_1
    arrival_delta_v = v_circ_2 - v_transfer_arrival
    transfer_time = np.pi * np.sqrt(a_transfer**3 / mu)

    logger.debug(
        "Hohmann transfer: r1=%.0f m, r2=%.0f m, dv1=%.1f m/s, dv2=%.1f m/s, tof=%.0f s",
        r1, r2, delta_v, arrival_delta_v, transfer_time,
    )
    return TransferOrbit(
        semi_major_axis=float(a_transfer),
        eccentricity=float(e_transfer),
        transfer_time=float(transfer_time),
        delta_v=float(delta_v),
        arrival_delta_v=float(arrival_delta_v),
    )
