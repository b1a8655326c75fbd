# tests/test_dynamics.py
"""
힘 모델, 대기 모델, 호만 전이 테스트
"""

import pytest
import numpy as np
from dataclasses import FrozenInstanceError

from orbital_mechanics.atmosphere import (
    atmospheric_density, drag_acceleration, RHO_TROPOPAUSE, RHO_STRATOSPHERE
)
from orbital_mechanics.bodies import CelestialBody, default_bodies, find_body
from orbital_mechanics.dynamics import ForceModel, gravitational_acceleration, thrust_acceleration
from orbital_mechanics.transfer import plan_hohmann_transfer
from simulation.state import OrbitalState
from utils.constants import G, MU_EARTH


class TestAtmosphere:
    """표준 대기 밀도 모델 테스트"""

    def test_sea_level_density(self):
        assert atmospheric_density(0.0) == pytest.approx(1.225)

    def test_below_sea_level_clamped(self):
        assert atmospheric_density(-500.0) == pytest.approx(1.225)

    def test_monotonic_decrease(self):
        """고도가 높아질수록 밀도는 감소"""
        altitudes = np.linspace(0.0, 150e3, 301)
        densities = [atmospheric_density(h) for h in altitudes]
        assert all(d1 > d2 for d1, d2 in zip(densities, densities[1:]))

    def test_layer_boundaries_continuous(self):
        """층 경계에서 밀도가 연속"""
        assert RHO_TROPOPAUSE == pytest.approx(0.3639, rel=1e-3)
        assert RHO_STRATOSPHERE == pytest.approx(0.0880, rel=1e-2)

        for boundary in (11000.0, 20000.0):
            below = atmospheric_density(boundary - 1e-3)
            above = atmospheric_density(boundary)
            assert below == pytest.approx(above, rel=1e-6)

    def test_drag_opposes_velocity(self):
        velocity = np.array([7000.0, 1000.0, 0.0])
        drag = drag_acceleration(velocity, 50e3, 2.0, 10.0, 1000.0)

        assert np.allclose(drag / np.linalg.norm(drag), -velocity / np.linalg.norm(velocity))

        rho = atmospheric_density(50e3)
        expected = 0.5 * rho * 2.0 * 10.0 * np.dot(velocity, velocity) / 1000.0
        assert np.linalg.norm(drag) == pytest.approx(expected)

    def test_drag_decreases_with_altitude(self):
        """같은 속도에서 해수면 항력 > 25 km 항력"""
        velocity = np.array([300.0, 0.0, 0.0])
        sea_level = drag_acceleration(velocity, 0.0, 2.0, 10.0, 1000.0)
        high = drag_acceleration(velocity, 25e3, 2.0, 10.0, 1000.0)
        assert np.linalg.norm(sea_level) > np.linalg.norm(high)

    def test_drag_zero_velocity(self):
        assert np.array_equal(drag_acceleration(np.zeros(3), 0.0, 2.0, 10.0, 1000.0), np.zeros(3))


class TestBodies:
    """천체 정의 테스트"""

    def test_default_bodies(self):
        bodies = default_bodies()
        assert [b.name for b in bodies] == ["Earth", "Moon", "Mars", "Jupiter", "Saturn"]
        assert bodies[0].gravitational_parameter(G) == pytest.approx(MU_EARTH)

    def test_find_body(self):
        bodies = default_bodies()
        assert find_body(bodies).name == "Earth"
        assert find_body(bodies, "Moon").name == "Moon"
        with pytest.raises(ValueError):
            find_body(bodies, "Pluto")
        with pytest.raises(ValueError):
            find_body([])

    def test_body_is_immutable(self):
        body = CelestialBody(name="Test", position=[1.0, 2.0, 3.0], mass=1.0)
        assert body.position == (1.0, 2.0, 3.0)
        with pytest.raises(FrozenInstanceError):
            body.mass = 2.0

    def test_negative_mass_rejected(self):
        with pytest.raises(ValueError):
            CelestialBody(name="Bad", mass=-1.0)

    def test_dict_roundtrip(self, moon):
        assert CelestialBody.from_dict(moon.to_dict()) == moon


class TestForceModel:
    """가속도 모델 테스트"""

    def setup_method(self):
        """테스트 설정"""
        self.earth = default_bodies()[0]
        self.model = ForceModel([self.earth], G=G)
        self.position = np.array([6771e3, 0.0, 0.0])

    def test_point_mass_gravity(self):
        """단일 천체 중력 = μ/r², 천체 방향"""
        accel = gravitational_acceleration(self.position, [self.earth], G)
        assert np.linalg.norm(accel) == pytest.approx(MU_EARTH / 6771e3**2, rel=1e-12)
        assert accel[0] < 0
        assert accel[1] == pytest.approx(0.0)

    def test_gravity_superposition(self, moon):
        """여러 천체의 중력은 선형 합"""
        both = gravitational_acceleration(self.position, [self.earth, moon], G)
        separate = (gravitational_acceleration(self.position, [self.earth], G)
                    + gravitational_acceleration(self.position, [moon], G))
        assert np.allclose(both, separate)

    def test_coincident_body_skipped(self, moon):
        """천체 중심과 일치하면 해당 천체 기여 없음 (NaN 없음)"""
        accel = gravitational_acceleration(np.zeros(3), [self.earth, moon], G)
        assert not np.isnan(accel).any()
        assert np.allclose(accel, gravitational_acceleration(np.zeros(3), [moon], G))

    def test_thrust_acceleration(self):
        """추력 방향은 정규화되어 F/m 크기"""
        accel = thrust_acceleration(np.array([2.0, 0.0, 0.0]), 1000.0, 1000.0)
        assert np.allclose(accel, [1.0, 0.0, 0.0])
        assert np.array_equal(thrust_acceleration(np.array([1.0, 0.0, 0.0]), 0.0, 1000.0), np.zeros(3))

    def test_components_sum(self):
        state = OrbitalState.from_vectors(self.position, [0.0, 7672.0, 0.0])
        components = self.model.compute_components(
            state.position, state.velocity, np.array([0.0, 1.0, 0.0]), 500.0, 1000.0
        )
        total = self.model.compute_acceleration(state, np.array([0.0, 1.0, 0.0]), 500.0, 1000.0)

        assert set(components) == {"gravity", "thrust", "drag"}
        assert np.allclose(total, components["gravity"] + components["thrust"] + components["drag"])
        assert components["thrust"][1] == pytest.approx(0.5)

    def test_nonpositive_mass_rejected(self):
        state = OrbitalState.from_vectors(self.position, [0.0, 7672.0, 0.0])
        with pytest.raises(ValueError):
            self.model.compute_acceleration(state, np.zeros(3), 0.0, 0.0)

    def test_altitude(self):
        assert self.model.altitude(self.position) == pytest.approx(400e3)


class TestHohmannTransfer:
    """호만 전이 계산 테스트"""

    def test_leo_to_geo(self):
        """LEO(6,671 km) → GEO(42,164 km): Δv ≈ 2.4 km/s, 전이 시간 ≈ 5시간 15분"""
        transfer = plan_hohmann_transfer([6671e3, 0.0, 0.0], [0.0, 42164e3, 0.0], MU_EARTH)

        assert transfer.delta_v == pytest.approx(2400.0, rel=0.02)
        assert transfer.transfer_time == pytest.approx(5 * 3600 + 15 * 60, rel=0.02)
        assert transfer.semi_major_axis == pytest.approx((6671e3 + 42164e3) / 2)
        assert 0 < transfer.eccentricity < 1

    def test_arrival_burn(self):
        transfer = plan_hohmann_transfer([6671e3, 0.0, 0.0], [42164e3, 0.0, 0.0], MU_EARTH)
        assert transfer.arrival_delta_v == pytest.approx(1467.0, rel=0.02)
        assert transfer.total_delta_v == pytest.approx(transfer.delta_v + transfer.arrival_delta_v)

    def test_inward_transfer_negative_delta_v(self):
        """안쪽 궤도로의 전이는 감속 (부호 포함)"""
        transfer = plan_hohmann_transfer([42164e3, 0.0, 0.0], [6671e3, 0.0, 0.0], MU_EARTH)
        assert transfer.delta_v < 0
        assert transfer.eccentricity < 0

    def test_same_radius_no_burn(self):
        transfer = plan_hohmann_transfer([7000e3, 0.0, 0.0], [0.0, 7000e3, 0.0], MU_EARTH)
        assert transfer.delta_v == pytest.approx(0.0, abs=1e-9)
        assert transfer.eccentricity == 0.0

    def test_zero_radius_rejected(self):
        with pytest.raises(ValueError):
            plan_hohmann_transfer([0.0, 0.0, 0.0], [42164e3, 0.0, 0.0])
