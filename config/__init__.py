# config/__init__.py
"""
설정 관리 모듈
"""

from .settings import (
    SimulationConfig, PhysicsConfig, VehicleConfig, EventConfig,
    get_config
)

__all__ = [
    'SimulationConfig', 'PhysicsConfig', 'VehicleConfig', 'EventConfig',
    'get_config'
]
