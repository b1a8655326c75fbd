"""
시뮬레이션 시계 및 주기 실행 드라이버
"""

import itertools
from typing import Callable, List, Optional

from utils.constants import PHYSICS_PARAMS
from utils.helpers import clamp, get_logger

logger = get_logger("clock")


class SimulationClock:
    """
    시뮬레이션 경과 시간 관리

    Attributes:
        physics_step: 고정 물리 스텝 [s]
        time_acceleration: 시간 가속 배율, [0.1, 1000]으로 제한
        elapsed: 누적 시뮬레이션 시간 [s] (단조 증가)
    """

    MIN_TIME_ACCELERATION = PHYSICS_PARAMS["min_time_acceleration"]
    MAX_TIME_ACCELERATION = PHYSICS_PARAMS["max_time_acceleration"]

    def __init__(
        self,
        physics_step: float = PHYSICS_PARAMS["physics_step"],
        time_acceleration: float = PHYSICS_PARAMS["time_acceleration"],
    ):
        if physics_step <= 0:
            raise ValueError(f"physics_step must be positive, got {physics_step}")
        self.physics_step = physics_step
        self.elapsed = 0.0
        self._time_acceleration = 1.0
        self.time_acceleration = time_acceleration

    @property
    def time_acceleration(self) -> float:
        return self._time_acceleration

    @time_acceleration.setter
    def time_acceleration(self, value: float):
        clamped = clamp(value, self.MIN_TIME_ACCELERATION, self.MAX_TIME_ACCELERATION)
        if clamped != value:
            logger.debug("Time acceleration %.3f clamped to %.3f", value, clamped)
        self._time_acceleration = clamped

    @property
    def scaled_step(self) -> float:
        """한 틱에 진행하는 시뮬레이션 시간 dt = physics_step · time_acceleration"""
        return self.physics_step * self._time_acceleration

    @property
    def tick_interval(self) -> float:
        """드라이버 호출 주기 = physics_step / time_acceleration"""
        return self.physics_step / self._time_acceleration

    def advance(self) -> float:
        """한 틱 진행. 이번 틱의 dt를 반환."""
        dt = self.scaled_step
        self.elapsed += dt
        return dt


class TimerHandle:
    """주기 실행 등록 핸들"""

    def __init__(self, interval: float, callback: Callable[[], None], next_time: float, seq: int):
        self.interval = interval
        self.callback = callback
        self.next_time = next_time
        self.seq = seq
        self.active = True

    def cancel(self):
        self.active = False


class ManualScheduler:
    """
    호스트 소유의 결정적 주기 실행 드라이버

    실제 시간을 쓰지 않고 advance()로 가상 시각을 진행하며,
    만기된 콜백을 시각 순서대로 호출한다. 단일 스레드 전용.
    """

    def __init__(self):
        self.now = 0.0
        self._handles: List[TimerHandle] = []
        self._seq = itertools.count()

    def schedule_periodic(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TimerHandle(interval, callback, self.now + interval, next(self._seq))
        self._handles.append(handle)
        return handle

    def _next_due(self, until: float) -> Optional[TimerHandle]:
        # 누적 부동소수점 오차로 경계 틱을 놓치지 않도록 허용 오차 적용
        until += 1e-9 * max(1.0, abs(until))
        due = [h for h in self._handles if h.active and h.next_time <= until]
        if not due:
            return None
        return min(due, key=lambda h: (h.next_time, h.seq))

    def advance(self, duration: float) -> int:
        """
        가상 시각을 duration만큼 진행

        Returns:
            호출된 콜백 수
        """
        target = self.now + duration
        fired = 0
        while True:
            handle = self._next_due(target)
            if handle is None:
                break
            self.now = handle.next_time
            handle.next_time += handle.interval
            handle.callback()
            fired += 1
        self._handles = [h for h in self._handles if h.active]
        self.now = target
        return fired

    @property
    def active_count(self) -> int:
        return sum(1 for h in self._handles if h.active)
