"""
공통 유틸리티 함수들
"""

import os
import json
import logging
import sys
import numpy as np
from typing import Any, Dict, Optional

from utils.constants import LOGGER_NAME, TWO_PI


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    로깅 설정

    Args:
        log_level: 로그 레벨 ("DEBUG", "INFO", "WARNING", "ERROR")
        log_file: 로그 파일 경로 (None이면 콘솔만)

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))

    # 기존 핸들러 제거
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # 포매터 설정
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # 콘솔 핸들러
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 파일 핸들러 (선택적)
    if log_file:
        ensure_dir(os.path.dirname(log_file))
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """프로젝트 로거의 하위 로거 반환"""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def save_json(data: Dict[str, Any], filepath: str, indent: int = 2):
    """
    JSON 파일 저장

    Args:
        data: 저장할 데이터
        filepath: 파일 경로
        indent: 들여쓰기 레벨
    """
    ensure_dir(os.path.dirname(filepath))

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False, default=str)


def load_json(filepath: str) -> Dict[str, Any]:
    """
    JSON 파일 로드

    Args:
        filepath: 파일 경로

    Returns:
        로드된 데이터
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


def ensure_dir(dirpath: str):
    """
    디렉토리 생성 (존재하지 않는 경우)

    Args:
        dirpath: 디렉토리 경로 (빈 문자열이면 현재 디렉토리)
    """
    if dirpath:
        os.makedirs(dirpath, exist_ok=True)


def wrap_angle(angle: float) -> float:
    """
    각도를 [-π, π) 범위로 래핑

    Args:
        angle: 입력 각도 (라디안)

    Returns:
        래핑된 각도
    """
    return ((angle + np.pi) % TWO_PI) - np.pi


def wrap_two_pi(angle: float) -> float:
    """각도를 [0, 2π) 범위로 래핑"""
    wrapped = angle % TWO_PI
    # 부동소수점 반올림으로 2π가 나오는 경우
    return 0.0 if wrapped >= TWO_PI else float(wrapped)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """
    값을 지정된 범위로 제한

    Args:
        value: 입력 값
        min_val: 최소값
        max_val: 최대값

    Returns:
        제한된 값
    """
    return float(min(max(value, min_val), max_val))


def format_time(seconds: float) -> str:
    """
    초를 읽기 쉬운 시간 형식으로 변환

    Args:
        seconds: 초 단위 시간

    Returns:
        포맷된 시간 문자열
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:05.2f}"
    else:
        return f"{minutes:02d}:{secs:05.2f}"
