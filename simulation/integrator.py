"""
고정 스텝 반암시적 오일러 적분
"""

import numpy as np

from simulation.state import OrbitalState


def semi_implicit_euler(state: OrbitalState, dt: float) -> OrbitalState:
    """
    반암시적(symplectic) 오일러 한 스텝

        v += a·dt
        r += v·dt   (갱신된 속도 사용)
        a  = 0

    state를 제자리에서 갱신하고 반환한다.
    """
    state.velocity = state.velocity + state.acceleration * dt
    state.position = state.position + state.velocity * dt
    state.acceleration = np.zeros(3)
    return state
