# tests/test_config.py
"""
설정 및 유틸리티 테스트
"""

import logging
import pytest
import numpy as np

from config.settings import EventConfig, PhysicsConfig, SimulationConfig, VehicleConfig, get_config
from orbital_mechanics.bodies import CelestialBody
from utils.helpers import clamp, format_time, get_logger, setup_logging, wrap_angle, wrap_two_pi
from utils.vector_math import (
    as_vector, perifocal_to_inertial_matrix, safe_normalize, velocity_aligned_frame
)


class TestSimulationConfig:
    """SimulationConfig 테스트"""

    def test_defaults(self):
        config = get_config()
        assert config.primary.name == "Earth"
        assert config.physics.physics_step == pytest.approx(1.0 / 60.0)
        assert config.physics.time_acceleration == 1.0
        assert config.vehicle.mass == 1000.0
        assert config.events.edge_triggered is False
        assert config.log_level == "INFO"

    def test_debug_mode_sets_log_level(self):
        assert get_config(debug_mode=True).log_level == "DEBUG"

    def test_custom_config_dicts(self):
        config = get_config(custom_config={
            "physics": {"physics_step": 0.5, "time_acceleration": 10.0},
            "events": {"apsis_tolerance": 500.0},
            "primary_body": "Moon",
        })
        assert isinstance(config.physics, PhysicsConfig)
        assert config.physics.physics_step == 0.5
        assert isinstance(config.events, EventConfig)
        assert config.events.apsis_tolerance == 500.0
        assert config.primary.name == "Moon"

    def test_unknown_primary_rejected(self):
        with pytest.raises(ValueError):
            SimulationConfig(primary_body="Vulcan")

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError):
            PhysicsConfig(physics_step=0.0)
        with pytest.raises(ValueError):
            VehicleConfig(mass=-1.0)

    def test_bodies_from_dicts(self):
        config = SimulationConfig(bodies=[{"name": "Solo", "mass": 1e24, "radius": 5e6}])
        assert isinstance(config.bodies[0], CelestialBody)
        assert config.primary.name == "Solo"

    def test_save_load_roundtrip(self, tmp_path):
        config = get_config(custom_config={
            "physics": {"physics_step": 0.25},
            "events": {"edge_triggered": True},
        })
        filepath = tmp_path / "configs" / "sim.json"
        config.save_to_file(str(filepath))

        loaded = SimulationConfig.load_from_file(str(filepath))
        assert loaded.to_dict() == config.to_dict()
        assert loaded.bodies == config.bodies


class TestHelpers:
    """유틸리티 함수 테스트"""

    def test_wrap_angle(self):
        assert wrap_angle(3 * np.pi / 2) == pytest.approx(-np.pi / 2)
        assert -np.pi <= wrap_angle(7.0) < np.pi

    def test_wrap_two_pi(self):
        assert wrap_two_pi(-np.pi / 2) == pytest.approx(3 * np.pi / 2)
        assert 0.0 <= wrap_two_pi(-1e-18) < 2 * np.pi

    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0

    def test_format_time(self):
        assert format_time(65.5) == "01:05.50"
        assert format_time(18986.0) == "05:16:26.00"

    def test_logger_hierarchy(self):
        root = setup_logging("DEBUG")
        child = get_logger("engine")
        assert child.name == "orbital_flight.engine"
        assert child.getEffectiveLevel() == logging.DEBUG
        setup_logging("INFO")
        assert root.level == logging.INFO


class TestVectorMath:
    """벡터 연산 테스트"""

    def test_as_vector_validates_shape(self):
        assert as_vector([1, 2, 3]).dtype == np.float64
        with pytest.raises(ValueError):
            as_vector([1.0, 2.0])

    def test_safe_normalize_zero(self):
        assert np.array_equal(safe_normalize(np.zeros(3)), np.zeros(3))

    def test_perifocal_rotation(self):
        """3-1-3 회전: RAAN=90°, i=0, ω=0 이면 x → y"""
        R = perifocal_to_inertial_matrix(np.pi / 2, 0.0, 0.0)
        assert np.allclose(R @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])

        R = perifocal_to_inertial_matrix(0.3, 0.7, 1.1)
        assert np.allclose(R @ R.T, np.eye(3))
        # 궤도면 법선은 경사각만큼 기울어짐
        assert (R @ np.array([0.0, 0.0, 1.0]))[2] == pytest.approx(np.cos(0.7))

    def test_velocity_aligned_frame(self):
        right, forward, up = velocity_aligned_frame(np.array([0.0, 7000.0, 0.0]))
        assert np.allclose(forward, [0.0, 1.0, 0.0])
        assert np.allclose(up, [0.0, 0.0, 1.0])
        assert np.allclose(np.cross(right, forward), up)

        # 수직 비행도 직교 기저
        right, forward, up = velocity_aligned_frame(np.array([0.0, 0.0, 100.0]))
        assert np.allclose(np.dot(right, forward), 0.0)
        assert np.allclose(np.dot(up, forward), 0.0)
