# tests/conftest.py
"""
pytest 설정 파일
"""

import pytest
import numpy as np
import warnings

from config.settings import get_config
from orbital_mechanics.bodies import CelestialBody, default_bodies
from utils.constants import EARTH_RADIUS, MU_EARTH

# 경고 필터링
warnings.filterwarnings("ignore", category=UserWarning)
warnings.filterwarnings("ignore", category=FutureWarning)

LEO_RADIUS = EARTH_RADIUS + 400e3  # 6,771 km


@pytest.fixture
def earth():
    """지구 (원점 고정)"""
    return default_bodies()[0]


@pytest.fixture
def earth_only_bodies(earth):
    return [earth]


@pytest.fixture
def circular_leo_state():
    """고도 400 km 적도 원궤도 상태"""
    r = np.array([LEO_RADIUS, 0.0, 0.0])
    v = np.array([0.0, np.sqrt(MU_EARTH / LEO_RADIUS), 0.0])
    return r, v


@pytest.fixture
def elliptic_state():
    """경사 타원 궤도 상태 (근지점 출발)"""
    r = np.array([7000e3, 0.0, 0.0])
    v = np.array([0.0, 7500.0, 1000.0])
    return r, v


@pytest.fixture
def engine_config():
    """0.25 s 물리 스텝 설정 (이진수로 정확히 표현되는 틱 간격)"""
    return get_config(custom_config={"physics": {"physics_step": 0.25}})


@pytest.fixture
def earth_only_config(earth):
    """지구만 인력원으로 쓰는 설정"""
    return get_config(custom_config={
        "bodies": [earth],
        "physics": {"physics_step": 0.25},
    })


@pytest.fixture
def moon():
    return CelestialBody(name="Moon", position=(384400e3, 0.0, 0.0), mass=7.342e22, radius=1737e3)
