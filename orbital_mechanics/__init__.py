# orbital_mechanics/__init__.py
"""
궤도 역학 모듈
"""

from .elements import OrbitalElements, OrbitRegime, TransferOrbit, UnsupportedRegimeError
from .bodies import CelestialBody, default_bodies, find_body
from .coordinate_transforms import (
    state_to_orbital_elements,
    orbital_elements_to_state,
    specific_orbital_energy,
    escape_velocity,
)
from .kepler import solve_kepler, solve_kepler_hyperbolic
from .orbit import KeplerOrbit, propagate, propagate_state
from .atmosphere import atmospheric_density, drag_acceleration
from .dynamics import (
    ForceModel,
    gravitational_acceleration,
    thrust_acceleration,
)
from .transfer import plan_hohmann_transfer

__all__ = [
    'OrbitalElements',
    'OrbitRegime',
    'TransferOrbit',
    'UnsupportedRegimeError',
    'CelestialBody',
    'default_bodies',
    'find_body',
    'state_to_orbital_elements',
    'orbital_elements_to_state',
    'specific_orbital_energy',
    'escape_velocity',
    'solve_kepler',
    'solve_kepler_hyperbolic',
    'KeplerOrbit',
    'propagate',
    'propagate_state',
    'atmospheric_density',
    'drag_acceleration',
    'ForceModel',
    'gravitational_acceleration',
    'thrust_acceleration',
    'plan_hohmann_transfer',
]
