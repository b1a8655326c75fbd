#!/usr/bin/env python3
"""
궤도 비행 시뮬레이션 메인 실행 스크립트
"""

import argparse
import math
import sys
from typing import Optional

import numpy as np

from config.settings import SimulationConfig, get_config
from orbital_mechanics.coordinate_transforms import escape_velocity, state_to_orbital_elements
from orbital_mechanics.elements import OrbitalElements
from simulation.clock import ManualScheduler
from simulation.engine import OrbitalMechanicsEngine
from simulation.events import OrbitalEvent, OrbitalEventType
from simulation.vehicle import Spacecraft
from utils.helpers import format_time, setup_logging


def print_orbital_elements(label: str, elements: Optional[OrbitalElements]):
    """궤도 요소를 보기 좋게 출력"""
    if elements is None:
        print(f"  {label}: 데이터 없음")
        return

    print(f"  {label}:")
    if elements.semi_major_axis is None:
        print("    a: 정의되지 않음 (포물선)")
    else:
        print(f"    a: {elements.semi_major_axis / 1000:.2f} km")
    print(f"    e: {elements.eccentricity:.6f}")
    print(f"    i: {math.degrees(elements.inclination):.3f}°")
    print(f"    RAAN: {math.degrees(elements.longitude_of_ascending_node):.3f}°")
    print(f"    omega: {math.degrees(elements.argument_of_periapsis):.3f}°")
    print(f"    nu: {math.degrees(elements.true_anomaly):.3f}°")
    print(f"    궤도 유형: {elements.regime.value}")


def circular_state(config: SimulationConfig, altitude: float):
    """주 천체 기준 원궤도 초기 상태 (x축 위치, y축 속도)"""
    primary = config.primary
    mu = primary.gravitational_parameter(config.physics.gravitational_constant)
    radius = primary.radius + altitude
    position = primary.position_vector + np.array([radius, 0.0, 0.0])
    velocity = np.array([0.0, np.sqrt(mu / radius), 0.0])
    return position, velocity


def run_simulation(config: SimulationConfig, altitude: float, duration: float,
                   thrust: float = 0.0, show_replication: bool = False):
    """호스트 드라이버로 엔진을 duration 초(실시간) 동안 구동"""
    print("\n=== 궤도 시뮬레이션 ===")

    position, velocity = circular_state(config, altitude)
    vehicle = Spacecraft(position, velocity, config.vehicle.mass, config.vehicle.max_thrust)
    if thrust > 0:
        vehicle.apply_thrust(thrust)

    engine = OrbitalMechanicsEngine(config)
    scheduler = ManualScheduler()

    event_log = []

    def record(event: OrbitalEvent):
        event_log.append(event)

    for event_type in OrbitalEventType:
        engine.subscribe(event_type, record)

    engine.attach(vehicle, scheduler)
    print_orbital_elements("초기 궤도", engine.elements)
    print(f"  주기: {format_time(engine.orbital_period)}")

    ticks = scheduler.advance(duration)
    engine.detach()

    print(f"\n실행 틱 수: {ticks}")
    print(f"시뮬레이션 시간: {format_time(engine.simulation_time)}")
    print(f"최종 고도: {engine.altitude / 1000:.2f} km")
    print(f"최종 속도: {np.linalg.norm(engine.velocity):.2f} m/s")
    print_orbital_elements("최종 궤도", engine.elements)

    if event_log:
        counts = {}
        for event in event_log:
            counts[event.event_type.value] = counts.get(event.event_type.value, 0) + 1
        print("\n이벤트:")
        for name, count in counts.items():
            print(f"  {name}: {count}")

    if show_replication:
        print(f"\n복제 상태: {engine.serialize()}")
    return engine


def run_transfer(config: SimulationConfig, altitude: float, target_altitude: float):
    """현재 원궤도에서 목표 고도까지의 호만 전이 출력"""
    print("\n=== 호만 전이 계획 ===")

    position, velocity = circular_state(config, altitude)
    target_position, _ = circular_state(config, target_altitude)

    engine = OrbitalMechanicsEngine(config)
    engine.initialize_state(position, velocity)
    transfer = engine.plan_transfer(target_position)

    print(f"  출발 고도: {altitude / 1000:.1f} km")
    print(f"  목표 고도: {target_altitude / 1000:.1f} km")
    print(f"  전이 궤도 반장축: {transfer.semi_major_axis / 1000:.2f} km")
    print(f"  전이 궤도 이심률: {transfer.eccentricity:.6f}")
    print(f"  출발 delta-v: {transfer.delta_v:.2f} m/s")
    print(f"  도착 delta-v: {transfer.arrival_delta_v:.2f} m/s")
    print(f"  총 delta-v: {transfer.total_delta_v:.2f} m/s")
    print(f"  전이 시간: {format_time(transfer.transfer_time)}")
    return transfer


def run_elements(config: SimulationConfig, position, velocity):
    """상태 벡터에서 궤도 요소 계산"""
    print("\n=== 궤도 요소 계산 ===")

    primary = config.primary
    mu = primary.gravitational_parameter(config.physics.gravitational_constant)
    r_rel = np.asarray(position, dtype=np.float64) - primary.position_vector

    elements = state_to_orbital_elements(r_rel, velocity, mu)
    print_orbital_elements(f"{primary.name} 기준", elements)

    radius = np.linalg.norm(r_rel)
    if radius > 0:
        print(f"  탈출 속도: {escape_velocity(radius, mu):.2f} m/s")
    period = elements.period(mu)
    if period > 0:
        print(f"  주기: {format_time(period)}")
    return elements


def main():
    """메인 함수"""
    parser = argparse.ArgumentParser(
        description="궤도 역학 시뮬레이션",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예제:
  # 고도 400 km 원궤도 60초 시뮬레이션
  python main.py --mode simulate --altitude 400e3 --duration 60

  # 시간 가속 100배
  python main.py --mode simulate --time-acceleration 100 --duration 10

  # LEO → GEO 호만 전이
  python main.py --mode transfer --altitude 400e3 --target-altitude 35786e3

  # 상태 벡터로부터 궤도 요소
  python main.py --mode elements --position 6771e3 0 0 --velocity 0 7672 0
        """
    )

    parser.add_argument('--mode', type=str, default='simulate',
                       choices=['simulate', 'transfer', 'elements'],
                       help='실행 모드 (기본값: simulate)')

    # 궤도 관련 인자
    parser.add_argument('--altitude', type=float, default=400e3,
                       help='초기 원궤도 고도 (m)')
    parser.add_argument('--target-altitude', type=float, default=35786e3,
                       help='전이 목표 고도 (m)')
    parser.add_argument('--position', type=float, nargs=3, default=None,
                       help='관성 좌표계 위치 [x y z] (m)')
    parser.add_argument('--velocity', type=float, nargs=3, default=None,
                       help='관성 좌표계 속도 [vx vy vz] (m/s)')

    # 시뮬레이션 관련 인자
    parser.add_argument('--duration', type=float, default=10.0,
                       help='호스트 드라이버 구동 시간 (s)')
    parser.add_argument('--time-acceleration', type=float, default=None,
                       help='시간 가속 배율 [0.1, 1000]')
    parser.add_argument('--physics-step', type=float, default=None,
                       help='고정 물리 스텝 (s)')
    parser.add_argument('--thrust', type=float, default=0.0,
                       help='전방 추력 (N)')
    parser.add_argument('--edge-triggered', action='store_true',
                       help='이벤트를 조건 성립 시 한 번만 발생')
    parser.add_argument('--show-replication', action='store_true',
                       help='최종 복제 상태 출력')

    # 설정 관련 인자
    parser.add_argument('--config', type=str, default=None,
                       help='설정 파일 경로')
    parser.add_argument('--save-config', type=str, default=None,
                       help='사용한 설정을 저장할 경로')
    parser.add_argument('--log-file', type=str, default=None,
                       help='로그 파일 경로')
    parser.add_argument('--debug', action='store_true',
                       help='디버그 모드')

    args = parser.parse_args()

    # 설정 로드
    if args.config:
        config = SimulationConfig.load_from_file(args.config)
    else:
        custom_config = {}

        physics = {}
        if args.time_acceleration is not None:
            physics['time_acceleration'] = args.time_acceleration
        if args.physics_step is not None:
            physics['physics_step'] = args.physics_step
        if physics:
            custom_config['physics'] = physics

        if args.edge_triggered:
            custom_config['events'] = {'edge_triggered': True}

        try:
            config = get_config(debug_mode=args.debug, custom_config=custom_config)
        except ValueError as e:
            print(f"설정 오류: {e}")
            sys.exit(1)

    setup_logging(config.log_level, args.log_file)

    if args.save_config:
        config.save_to_file(args.save_config)
        print(f"설정 저장: {args.save_config}")

    # 설정 출력
    print("\n=== 설정 정보 ===")
    print(f"실행 모드: {args.mode}")
    print(f"주 천체: {config.primary.name}")
    print(f"물리 스텝: {config.physics.physics_step:.6f} s")
    print(f"시간 가속: {config.physics.time_acceleration}")
    print(f"디버그 모드: {config.debug_mode}")

    try:
        if args.mode == 'simulate':
            run_simulation(config, args.altitude, args.duration, args.thrust,
                           show_replication=args.show_replication)
        elif args.mode == 'transfer':
            run_transfer(config, args.altitude, args.target_altitude)
        elif args.mode == 'elements':
            if args.position is None or args.velocity is None:
                parser.error("--mode elements 에는 --position 과 --velocity 가 필요합니다")
            run_elements(config, args.position, args.velocity)
    except ValueError as e:
        print(f"\n오류: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
