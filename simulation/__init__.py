# simulation/__init__.py
"""
시뮬레이션 모듈
"""

from .state import OrbitalState
from .integrator import semi_implicit_euler
from .clock import SimulationClock, ManualScheduler, TimerHandle
from .events import EventBus, EventDetector, OrbitalEvent, OrbitalEventType
from .vehicle import Spacecraft, VehicleInterface
from .replication import ReplicatedOrbitState, serialize_orbit_state, deserialize_orbit_state
from .engine import OrbitalMechanicsEngine

__all__ = [
    'OrbitalState',
    'semi_implicit_euler',
    'SimulationClock',
    'ManualScheduler',
    'TimerHandle',
    'EventBus',
    'EventDetector',
    'OrbitalEvent',
    'OrbitalEventType',
    'Spacecraft',
    'VehicleInterface',
    'ReplicatedOrbitState',
    'serialize_orbit_state',
    'deserialize_orbit_state',
    'OrbitalMechanicsEngine',
]
