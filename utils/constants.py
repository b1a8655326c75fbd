"""
물리 상수 및 시뮬레이션 기본 설정 상수 정의
"""

import numpy as np

# 물리 상수
G = 6.67430e-11  # 만유인력 상수 (m^3/kg/s^2)
EARTH_MASS = 5.972e24  # 지구 질량 (kg)
EARTH_RADIUS = 6371e3  # 지구 반지름 (m)
MU_EARTH = G * EARTH_MASS  # 지구 중력 상수 (m^3/s^2)

# 천체 테이블 (위치/속도는 고정값, 천체 자체는 전파하지 않음)
DEFAULT_BODIES = [
    {
        "name": "Earth",
        "position": (0.0, 0.0, 0.0),
        "velocity": (0.0, 0.0, 0.0),
        "mass": EARTH_MASS,
        "radius": EARTH_RADIUS,
    },
    {
        "name": "Moon",
        "position": (384400e3, 0.0, 0.0),  # 지구로부터 384,400 km
        "velocity": (0.0, 1022.0, 0.0),
        "mass": 7.342e22,
        "radius": 1737e3,
    },
    {
        "name": "Mars",
        "position": (225e9, 0.0, 0.0),
        "velocity": (0.0, 24000.0, 0.0),
        "mass": 6.39e23,
        "radius": 3389e3,
    },
    {
        "name": "Jupiter",
        "position": (778e9, 0.0, 0.0),
        "velocity": (0.0, 13000.0, 0.0),
        "mass": 1.898e27,
        "radius": 69911e3,
    },
    {
        "name": "Saturn",
        "position": (1427e9, 0.0, 0.0),
        "velocity": (0.0, 9600.0, 0.0),
        "mass": 5.683e26,
        "radius": 58232e3,
    },
]

# 물리 시뮬레이션 파라미터
PHYSICS_PARAMS = {
    "gravitational_constant": G,
    "physics_step": 1.0 / 60.0,  # 고정 물리 스텝 (s)
    "time_acceleration": 1.0,
    "min_time_acceleration": 0.1,
    "max_time_acceleration": 1000.0,
}

# 기체 파라미터
VEHICLE_PARAMS = {
    "mass": 1000.0,  # 기체 질량 (kg)
    "drag_coefficient": 2.0,  # 항력 계수
    "cross_sectional_area": 10.0,  # 단면적 (m^2)
    "max_thrust": 100000.0,  # 최대 추력 (N)
}

# 궤도 이벤트 임계값
EVENT_PARAMS = {
    "apsis_tolerance": 1000.0,  # 근/원지점 판정 거리 (m)
    "atmosphere_entry_altitude": 100e3,  # 대기권 진입 고도 (m)
    "edge_triggered": False,  # False면 조건 유지 동안 매 틱 발생
}

# 표준 대기 모델 파라미터
ATMOSPHERE_PARAMS = {
    "sea_level_density": 1.225,  # kg/m^3
    "lapse_rate": 0.0065,  # K/m
    "sea_level_temperature": 288.15,  # K
    "troposphere_exponent": 4.256,
    "tropopause_altitude": 11000.0,  # m
    "stratosphere_altitude": 20000.0,  # m
    "lower_stratosphere_scale_height": 6341.62,  # m
    "upper_stratosphere_scale_height": 7400.0,  # m
}

# 케플러 방정식 반복 해법 설정
KEPLER_PARAMS = {
    "max_iter": 10,
    "tol": 1e-6,
}

# 수치 안정성 파라미터
NUMERICAL_STABILITY = {
    "min_value": 1e-10,  # 최소값 (0으로 나누기 방지)
    "circular_eccentricity": 1e-9,  # 이 값 미만이면 원 궤도로 취급
    "equatorial_node": 1e-9,  # |N|/|H| 가 이 값 미만이면 적도 궤도
    "parabolic_energy": 1e-12,  # |ε|·r/μ 가 이 값 미만이면 포물선 궤도
    "parabolic_eccentricity": 1e-12,  # |e - 1| 허용 오차
}

# 로깅 설정
LOGGER_NAME = "orbital_flight"

# 각도 변환
DEG_TO_RAD = np.pi / 180.0
RAD_TO_DEG = 180.0 / np.pi
TWO_PI = 2.0 * np.pi
