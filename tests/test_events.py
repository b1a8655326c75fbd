# tests/test_events.py
"""
궤도 이벤트 판정 및 이벤트 큐 테스트
"""

import pytest
import numpy as np

from orbital_mechanics.bodies import CelestialBody, default_bodies
from orbital_mechanics.coordinate_transforms import state_to_orbital_elements
from simulation.events import EventBus, EventDetector, OrbitalEvent, OrbitalEventType
from utils.constants import G, MU_EARTH

LEO_RADIUS = 6771e3


class TestEventDetector:
    """EventDetector 테스트"""

    def setup_method(self):
        """테스트 설정"""
        self.earth = default_bodies()[0]
        self.detector = EventDetector(self.earth, G)
        self.position = np.array([LEO_RADIUS, 0.0, 0.0])
        self.v_escape = np.sqrt(2 * MU_EARTH / LEO_RADIUS)

    def _check(self, position, velocity, detector=None):
        detector = detector or self.detector
        elements = state_to_orbital_elements(position, velocity, MU_EARTH)
        return detector.check(position, velocity, elements)

    def test_escape_boundary(self):
        """탈출 속도 바로 아래는 발생하지 않고, 바로 위는 항상 발생"""
        below = np.array([0.0, self.v_escape * (1 - 1e-6), 0.0])
        above = np.array([0.0, self.v_escape * (1 + 1e-6), 0.0])

        assert OrbitalEventType.ESCAPE_VELOCITY_REACHED not in self._check(self.position, below)
        assert OrbitalEventType.ESCAPE_VELOCITY_REACHED in self._check(self.position, above)

    def test_atmospheric_entry(self):
        """대기권 진입 고도(100 km) 아래에서 발생"""
        inside = np.array([self.earth.radius + 80e3, 0.0, 0.0])
        outside = np.array([self.earth.radius + 120e3, 0.0, 0.0])
        velocity = np.array([0.0, 7800.0, 0.0])

        assert OrbitalEventType.ATMOSPHERIC_ENTRY in self._check(inside, velocity)
        assert OrbitalEventType.ATMOSPHERIC_ENTRY not in self._check(outside, velocity)

    def test_periapsis_detected(self):
        """근지점에서 출발하는 타원 궤도"""
        velocity = np.array([0.0, 8000.0, 0.0])
        fired = self._check(self.position, velocity)
        assert OrbitalEventType.PERIAPSIS_REACHED in fired
        assert OrbitalEventType.APOAPSIS_REACHED not in fired

    def test_apoapsis_detected(self):
        """원지점에서 출발하는 타원 궤도"""
        velocity = np.array([0.0, 7000.0, 0.0])
        fired = self._check(self.position, velocity)
        assert OrbitalEventType.APOAPSIS_REACHED in fired
        assert OrbitalEventType.PERIAPSIS_REACHED not in fired

    def test_circular_orbit_has_no_apsis_events(self):
        velocity = np.array([0.0, np.sqrt(MU_EARTH / LEO_RADIUS), 0.0])
        fired = self._check(self.position, velocity)
        assert OrbitalEventType.PERIAPSIS_REACHED not in fired
        assert OrbitalEventType.APOAPSIS_REACHED not in fired

    def test_hyperbolic_orbit_has_no_apoapsis(self):
        velocity = np.array([0.0, self.v_escape * 1.2, 0.0])
        conditions = self.detector.evaluate(
            self.position, velocity, state_to_orbital_elements(self.position, velocity)
        )
        assert conditions[OrbitalEventType.APOAPSIS_REACHED] is False
        assert conditions[OrbitalEventType.PERIAPSIS_REACHED]

    def test_level_triggered_by_default(self):
        """기본 설정: 조건이 유지되는 매 틱마다 발생"""
        velocity = np.array([0.0, self.v_escape * 1.1, 0.0])
        for _ in range(3):
            assert OrbitalEventType.ESCAPE_VELOCITY_REACHED in self._check(self.position, velocity)

    def test_edge_triggered_latches(self):
        """edge_triggered: 조건이 새로 성립한 틱에만 발생, 풀리면 재무장"""
        detector = EventDetector(self.earth, G, edge_triggered=True)
        fast = np.array([0.0, self.v_escape * 1.1, 0.0])
        slow = np.array([0.0, self.v_escape * 0.9, 0.0])
        event = OrbitalEventType.ESCAPE_VELOCITY_REACHED

        assert event in self._check(self.position, fast, detector)
        assert event not in self._check(self.position, fast, detector)
        assert event not in self._check(self.position, slow, detector)
        assert event in self._check(self.position, fast, detector)

    def test_reset_clears_latch(self):
        detector = EventDetector(self.earth, G, edge_triggered=True)
        fast = np.array([0.0, self.v_escape * 1.1, 0.0])
        self._check(self.position, fast, detector)
        detector.reset()
        assert OrbitalEventType.ESCAPE_VELOCITY_REACHED in self._check(self.position, fast, detector)

    def test_radius_measured_from_primary(self):
        """주 천체가 원점이 아니어도 상대 거리로 판정"""
        offset = np.array([1e9, 0.0, 0.0])
        shifted = CelestialBody(name="Shifted", position=tuple(offset),
                                mass=self.earth.mass, radius=self.earth.radius)
        detector = EventDetector(shifted, G)
        position = offset + np.array([self.earth.radius + 50e3, 0.0, 0.0])
        velocity = np.array([0.0, 7800.0, 0.0])

        conditions = detector.evaluate(position, velocity, None)
        assert conditions[OrbitalEventType.ATMOSPHERIC_ENTRY]


class TestEventBus:
    """EventBus 테스트"""

    def setup_method(self):
        """테스트 설정"""
        self.bus = EventBus()
        self.received = []

    def test_publish_is_deferred_until_drain(self):
        self.bus.subscribe(OrbitalEventType.PERIAPSIS_REACHED, self.received.append)
        self.bus.publish(OrbitalEvent(OrbitalEventType.PERIAPSIS_REACHED, 1.0))

        assert self.received == []
        assert self.bus.pending == 1

        delivered = self.bus.drain()
        assert len(delivered) == 1
        assert self.received == delivered
        assert self.bus.pending == 0

    def test_delivery_order_and_filtering(self):
        self.bus.subscribe(OrbitalEventType.APOAPSIS_REACHED, self.received.append)
        self.bus.publish(OrbitalEvent(OrbitalEventType.APOAPSIS_REACHED, 1.0))
        self.bus.publish(OrbitalEvent(OrbitalEventType.PERIAPSIS_REACHED, 1.0))
        self.bus.publish(OrbitalEvent(OrbitalEventType.APOAPSIS_REACHED, 2.0))

        self.bus.drain()
        assert [e.simulation_time for e in self.received] == [1.0, 2.0]

    def test_unsubscribe(self):
        unsubscribe = self.bus.subscribe(OrbitalEventType.ATMOSPHERIC_ENTRY, self.received.append)
        unsubscribe()
        self.bus.publish(OrbitalEvent(OrbitalEventType.ATMOSPHERIC_ENTRY, 0.0))
        self.bus.drain()
        assert self.received == []

    def test_event_is_immutable(self):
        event = OrbitalEvent(OrbitalEventType.TRANSFER_COMPUTED, 0.0, payload="x")
        with pytest.raises(AttributeError):
            event.simulation_time = 1.0
