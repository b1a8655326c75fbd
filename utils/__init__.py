# utils/__init__.py
"""
유틸리티 모듈
"""

from .constants import *
from .helpers import *
from .vector_math import (
    as_vector,
    safe_normalize,
    perifocal_to_inertial_matrix,
    velocity_aligned_frame,
)

__all__ = [
    'G', 'EARTH_MASS', 'EARTH_RADIUS', 'MU_EARTH', 'DEFAULT_BODIES',
    'PHYSICS_PARAMS', 'VEHICLE_PARAMS', 'EVENT_PARAMS', 'ATMOSPHERE_PARAMS',
    'KEPLER_PARAMS', 'NUMERICAL_STABILITY', 'LOGGER_NAME',
    'DEG_TO_RAD', 'RAD_TO_DEG', 'TWO_PI',
    'setup_logging', 'get_logger', 'save_json', 'load_json', 'ensure_dir',
    'wrap_angle', 'wrap_two_pi', 'clamp', 'format_time',
    'as_vector', 'safe_normalize', 'perifocal_to_inertial_matrix',
    'velocity_aligned_frame',
]
