"""
궤도 이벤트 판정 및 이벤트 큐
"""

import numpy as np
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set

from orbital_mechanics.bodies import CelestialBody
from orbital_mechanics.elements import OrbitalElements
from utils.constants import EVENT_PARAMS, NUMERICAL_STABILITY
from utils.helpers import get_logger

logger = get_logger("events")


class OrbitalEventType(Enum):
    PERIAPSIS_REACHED = "periapsis_reached"
    APOAPSIS_REACHED = "apoapsis_reached"
    ATMOSPHERIC_ENTRY = "atmospheric_entry"
    ESCAPE_VELOCITY_REACHED = "escape_velocity_reached"
    TRANSFER_COMPUTED = "transfer_computed"


@dataclass(frozen=True)
class OrbitalEvent:
    """
    틱 경계에서 전달되는 알림

    payload는 TRANSFER_COMPUTED의 경우 TransferOrbit, 그 외에는 None.
    """

    event_type: OrbitalEventType
    simulation_time: float
    payload: Any = None


EventCallback = Callable[[OrbitalEvent], None]


class EventBus:
    """
    이벤트 큐 + 구독자 콜백

    publish()는 큐에만 쌓고, drain()이 틱 당 한 번 발행 순서대로 전달한다.
    """

    def __init__(self):
        self._subscribers: Dict[OrbitalEventType, List[EventCallback]] = defaultdict(list)
        self._queue: List[OrbitalEvent] = []

    def subscribe(self, event_type: OrbitalEventType, callback: EventCallback) -> Callable[[], None]:
        """
        콜백 등록

        Returns:
            등록 해제 함수
        """
        self._subscribers[event_type].append(callback)

        def unsubscribe():
            if callback in self._subscribers[event_type]:
                self._subscribers[event_type].remove(callback)

        return unsubscribe

    def publish(self, event: OrbitalEvent):
        self._queue.append(event)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def drain(self) -> List[OrbitalEvent]:
        """대기 중인 이벤트를 모두 전달하고 전달된 목록을 반환"""
        events, self._queue = self._queue, []
        for event in events:
            for callback in list(self._subscribers[event.event_type]):
                callback(event)
        return events


class EventDetector:
    """
    적분 및 궤도 요소 재계산 후 궤도 임계값 검사

    edge_triggered=False(기본)이면 조건이 유지되는 매 틱마다 발생한다.
    True이면 조건이 새로 성립한 틱에만 발생하고 조건이 풀릴 때까지 잠긴다.
    """

    def __init__(
        self,
        primary: CelestialBody,
        G: float,
        apsis_tolerance: float = EVENT_PARAMS["apsis_tolerance"],
        atmosphere_entry_altitude: float = EVENT_PARAMS["atmosphere_entry_altitude"],
        edge_triggered: bool = EVENT_PARAMS["edge_triggered"],
    ):
        self.primary = primary
        self.mu = primary.gravitational_parameter(G)
        self.apsis_tolerance = apsis_tolerance
        self.atmosphere_entry_altitude = atmosphere_entry_altitude
        self.edge_triggered = edge_triggered
        self._latched: Set[OrbitalEventType] = set()

    def evaluate(self, position: np.ndarray, velocity: np.ndarray,
                 elements: Optional[OrbitalElements]) -> Dict[OrbitalEventType, bool]:
        """이벤트별 조건 성립 여부"""
        radius = float(np.linalg.norm(position - self.primary.position_vector))
        speed = float(np.linalg.norm(velocity))

        conditions = {
            OrbitalEventType.PERIAPSIS_REACHED: False,
            OrbitalEventType.APOAPSIS_REACHED: False,
            OrbitalEventType.ATMOSPHERIC_ENTRY: radius < self.primary.radius + self.atmosphere_entry_altitude,
            OrbitalEventType.ESCAPE_VELOCITY_REACHED: False,
        }

        # 원 궤도에서는 근/원지점이 정의되지 않음
        if elements is not None and elements.eccentricity >= NUMERICAL_STABILITY["circular_eccentricity"]:
            periapsis = elements.periapsis_radius
            apoapsis = elements.apoapsis_radius
            if periapsis is not None:
                conditions[OrbitalEventType.PERIAPSIS_REACHED] = (
                    abs(radius - periapsis) < self.apsis_tolerance
                )
            if apoapsis is not None:
                conditions[OrbitalEventType.APOAPSIS_REACHED] = (
                    abs(radius - apoapsis) < self.apsis_tolerance
                )

        if radius > 0:
            escape_velocity = np.sqrt(2.0 * self.mu / radius)
            conditions[OrbitalEventType.ESCAPE_VELOCITY_REACHED] = speed > escape_velocity
        return conditions

    def check(self, position: np.ndarray, velocity: np.ndarray,
              elements: Optional[OrbitalElements]) -> List[OrbitalEventType]:
        """이번 틱에 발생해야 할 이벤트 목록"""
        fired = []
        for event_type, active in self.evaluate(position, velocity, elements).items():
            if not active:
                self._latched.discard(event_type)
                continue
            if self.edge_triggered and event_type in self._latched:
                continue
            self._latched.add(event_type)
            fired.append(event_type)
        if fired:
            logger.debug("Orbital events: %s", ", ".join(e.value for e in fired))
        return fired

    def reset(self):
        self._latched.clear()
