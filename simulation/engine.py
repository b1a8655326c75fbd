"""
궤도 역학 엔진: 한 기체의 상태를 소유하고 매 틱 하위 모듈을 조율
"""

import numpy as np
from typing import Callable, List, Optional, Sequence, Tuple

from config.settings import SimulationConfig, get_config
from orbital_mechanics.bodies import CelestialBody, find_body
from orbital_mechanics.coordinate_transforms import state_to_orbital_elements
from orbital_mechanics.dynamics import ForceModel
from orbital_mechanics.elements import OrbitalElements, TransferOrbit, UnsupportedRegimeError
from orbital_mechanics.orbit import propagate_state
from orbital_mechanics.transfer import plan_hohmann_transfer
from simulation.clock import SimulationClock
from simulation.events import EventBus, EventDetector, OrbitalEvent, OrbitalEventType
from simulation.integrator import semi_implicit_euler
from simulation.replication import serialize_orbit_state
from simulation.state import OrbitalState
from simulation.vehicle import VehicleInterface
from utils.helpers import get_logger
from utils.vector_math import as_vector, VectorLike

logger = get_logger("engine")


class OrbitalMechanicsEngine:
    """
    단일 기체 궤도 역학 엔진

    틱 당 데이터 흐름:
        추력 입력 → ForceModel 가속도 → 반암시적 오일러 적분
        → 궤도 요소 재계산 → 이벤트 판정 → 호스트에 상태 반영 및 이벤트 전달

    엔진이 OrbitalState의 유일한 writer이며, 외부에는 복사본만 제공한다.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 bodies: Optional[Sequence[CelestialBody]] = None):
        """
        엔진 초기화

        Args:
            config: 시뮬레이션 설정 (None이면 기본값)
            bodies: 인력원 천체 목록 (None이면 config.bodies)
        """
        self.config = config if config is not None else get_config()

        self._init_parameters(bodies)
        self._init_components()

        # 상태 변수
        self._state = OrbitalState()
        self._elements: Optional[OrbitalElements] = None
        self._elements_epoch = 0.0
        self.last_transfer: Optional[TransferOrbit] = None
        self.tick_count = 0

        # 호스트 연결
        self._vehicle: Optional[VehicleInterface] = None
        self._scheduler = None
        self._timer = None
        self._in_tick = False
        self._reschedule_pending = False

    def _init_parameters(self, bodies: Optional[Sequence[CelestialBody]]):
        """파라미터 초기화"""
        self.bodies: Tuple[CelestialBody, ...] = tuple(bodies if bodies is not None else self.config.bodies)
        self.primary = find_body(self.bodies, self.config.primary_body)
        self.G = self.config.physics.gravitational_constant
        self.mu = self.primary.gravitational_parameter(self.G)
        self.vehicle_mass = self.config.vehicle.mass

    def _init_components(self):
        """하위 모듈 생성"""
        self.clock = SimulationClock(
            self.config.physics.physics_step,
            self.config.physics.time_acceleration,
        )
        self.force_model = ForceModel(
            self.bodies,
            G=self.G,
            primary_body=self.primary.name,
            drag_coefficient=self.config.vehicle.drag_coefficient,
            cross_sectional_area=self.config.vehicle.cross_sectional_area,
        )
        self.event_detector = EventDetector(
            self.primary,
            self.G,
            apsis_tolerance=self.config.events.apsis_tolerance,
            atmosphere_entry_altitude=self.config.events.atmosphere_entry_altitude,
            edge_triggered=self.config.events.edge_triggered,
        )
        self.events = EventBus()

    # ------------------------------------------------------------------
    # 호스트 연결
    # ------------------------------------------------------------------

    def attach(self, vehicle: VehicleInterface, scheduler=None):
        """
        기체 연결 및 초기 상태 설정

        Args:
            vehicle: VehicleInterface 구현체
            scheduler: schedule_periodic(interval, callback)을 제공하는 드라이버.
                주어지면 tick_interval 주기로 step()을 예약한다.
        """
        if self._vehicle is not None:
            self.detach()

        self._vehicle = vehicle
        # 질량을 노출하지 않는 호스트는 설정값 사용
        self.vehicle_mass = getattr(vehicle, "mass", self.config.vehicle.mass)
        self.initialize_state(vehicle.get_position(), vehicle.get_velocity())

        if scheduler is not None:
            self._scheduler = scheduler
            self._schedule_driver()

        logger.info("Vehicle attached at position %s", self._state.position)

    def detach(self):
        """기체 분리. 이후 틱은 예약되지 않는다."""
        self._cancel_driver()
        self._scheduler = None
        self._vehicle = None
        self.vehicle_mass = self.config.vehicle.mass

    def initialize_state(self, position: VectorLike, velocity: VectorLike):
        """호스트 없이 초기 상태를 직접 설정"""
        self._state = OrbitalState.from_vectors(position, velocity)
        self.event_detector.reset()
        self._recompute_elements()

    def _schedule_driver(self):
        self._timer = self._scheduler.schedule_periodic(self.clock.tick_interval, self._on_timer)

    def _cancel_driver(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self):
        self.step(self.clock.tick_interval)

    # ------------------------------------------------------------------
    # 틱
    # ------------------------------------------------------------------

    def step(self, delta_time: Optional[float] = None) -> List[OrbitalEvent]:
        """
        물리 한 틱 진행

        Args:
            delta_time: 호스트 프레임 시간 (참고용, 내부 적분은 고정 스텝 사용)

        Returns:
            이번 틱 경계에서 전달된 이벤트 목록
        """
        self._in_tick = True
        try:
            if delta_time is not None:
                logger.debug("Tick %d (host dt=%.6f s)", self.tick_count, delta_time)

            thrust_vector, thrust_magnitude = self._read_thrust()

            # 가속도는 매 틱 새로 계산
            self._state.reset_acceleration()
            self._state.acceleration = self.force_model.compute_acceleration(
                self._state, thrust_vector, thrust_magnitude, self.vehicle_mass
            )

            dt = self.clock.advance()
            semi_implicit_euler(self._state, dt)

            # 추력으로 속도가 바뀐 경우에도 여기서 궤도 요소를 다시 구한다
            if thrust_magnitude > 0:
                logger.debug("Thrust %.1f N applied; orbital elements recomputed", thrust_magnitude)
            self._recompute_elements()

            for event_type in self.event_detector.check(
                self._state.position, self._state.velocity, self._elements
            ):
                self.events.publish(OrbitalEvent(event_type, self.clock.elapsed))

            self._push_to_vehicle()
            self.tick_count += 1
            return self.events.drain()
        finally:
            self._in_tick = False
            if self._reschedule_pending:
                self._reschedule_pending = False
                self._reschedule()

    def _read_thrust(self) -> Tuple[np.ndarray, float]:
        if self._vehicle is None:
            return np.zeros(3), 0.0
        return (
            np.asarray(self._vehicle.get_thrust_vector(), dtype=np.float64),
            float(self._vehicle.get_thrust_magnitude()),
        )

    def _push_to_vehicle(self):
        if self._vehicle is None:
            return
        self._vehicle.set_position(self._state.position.copy())
        self._vehicle.set_velocity(self._state.velocity.copy())

    def _recompute_elements(self):
        """현재 상태에서 궤도 요소를 전부 다시 계산하고 epoch를 갱신"""
        self._elements = state_to_orbital_elements(
            self._state.position - self.primary.position_vector,
            self._state.velocity,
            self.mu,
        )
        self._elements_epoch = self.clock.elapsed

    # ------------------------------------------------------------------
    # 시간 가속
    # ------------------------------------------------------------------

    def set_time_acceleration(self, acceleration: float):
        """
        시간 가속 배율 설정 ([0.1, 1000]으로 제한)

        드라이버는 physics_step / time_acceleration 주기로 취소 후 재예약된다.
        틱 실행 중 호출되면 재예약은 해당 틱이 끝난 뒤 수행된다.
        """
        self.clock.time_acceleration = acceleration
        if self._in_tick:
            self._reschedule_pending = True
        else:
            self._reschedule()

    def _reschedule(self):
        if self._scheduler is None:
            return
        self._cancel_driver()
        self._schedule_driver()
        logger.debug("Driver rescheduled at %.6f s interval", self.clock.tick_interval)

    # ------------------------------------------------------------------
    # 전이 궤도 / 예측
    # ------------------------------------------------------------------

    def plan_transfer(self, target_position: VectorLike,
                      target_velocity: Optional[VectorLike] = None) -> TransferOrbit:
        """
        현재 위치에서 목표 위치 반경까지의 호만 전이 계산

        기동은 실행하지 않는다. TRANSFER_COMPUTED 이벤트는 다음 틱 경계에서 전달된다.
        target_velocity는 동일 평면 근사에서는 사용하지 않는다.
        """
        if target_velocity is not None:
            as_vector(target_velocity)

        transfer = plan_hohmann_transfer(
            self._state.position - self.primary.position_vector,
            as_vector(target_position) - self.primary.position_vector,
            self.mu,
        )
        self.last_transfer = transfer
        self.events.publish(
            OrbitalEvent(OrbitalEventType.TRANSFER_COMPUTED, self.clock.elapsed, transfer)
        )
        return transfer

    def predict_state(self, time_ahead: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        현재 궤도 요소 epoch의 상태에서 time_ahead 초 후의 위치/속도를 해석적으로 예측

        궤도 요소 대신 epoch 시각의 실제 (r, v)에서 전파하므로 적도/원 궤도에서도
        궤도면 내 위치가 보존된다.

        Raises:
            UnsupportedRegimeError: 포물선 궤도
        """
        if self._elements is None:
            raise ValueError("Engine state is not initialized")
        try:
            r_rel, v = propagate_state(
                self._state.position - self.primary.position_vector,
                self._state.velocity,
                time_ahead,
                self.mu,
            )
        except UnsupportedRegimeError:
            logger.warning("Analytic prediction unavailable for %s orbit", self._elements.regime.value)
            raise
        return r_rel + self.primary.position_vector, v

    # ------------------------------------------------------------------
    # 접근자 (복사본 반환)
    # ------------------------------------------------------------------

    def subscribe(self, event_type: OrbitalEventType,
                  callback: Callable[[OrbitalEvent], None]) -> Callable[[], None]:
        return self.events.subscribe(event_type, callback)

    @property
    def position(self) -> np.ndarray:
        return self._state.position.copy()

    @property
    def velocity(self) -> np.ndarray:
        return self._state.velocity.copy()

    @property
    def acceleration(self) -> np.ndarray:
        return self._state.acceleration.copy()

    @property
    def state(self) -> OrbitalState:
        return self._state.copy()

    @property
    def elements(self) -> Optional[OrbitalElements]:
        return self._elements

    @property
    def elements_epoch(self) -> float:
        return self._elements_epoch

    @property
    def altitude(self) -> float:
        return self.force_model.altitude(self._state.position)

    @property
    def orbital_period(self) -> float:
        """궤도 주기 [s]. 반장축이 0 이하이거나 정의되지 않으면 0."""
        if self._elements is None:
            return 0.0
        return self._elements.period(self.mu)

    @property
    def simulation_time(self) -> float:
        return self.clock.elapsed

    @property
    def time_acceleration(self) -> float:
        return self.clock.time_acceleration

    @property
    def is_attached(self) -> bool:
        return self._vehicle is not None

    def serialize(self):
        return serialize_orbit_state(self)
