"""
padmotion - 게임 컨트롤러 6축 IMU 센서 퓨전

주요 특징:
- 상보 필터 기반 방향 추정 (자이로 적분 + 가속도계 중력 보정)
- 정지 샘플 기반 자이로/가속도 바이어스 추정 (지수 이동 평균)
- 중력 보정 선형 가속도
- 명시적 시간 간격 입력 (재현 가능한 처리)

Version: 1.0
Author: FurSys AI Team
"""

__version__ = "1.0.0"
__author__ = "FurSys AI Team"

from .geometry import Vector2, Vector3, Quaternion

from .filters import (
    LowPassFilter,
    ExpMovingAverage,
    ExpMovingAverageVector3
)

from .fusion import (
    OrientationTracker,
    MotionState,
    MotionSession,
    MotionSessionRegistry
)

from .config import SystemConfig, load_config

__all__ = [
    # Geometry
    'Vector2',
    'Vector3',
    'Quaternion',
    # Filters
    'LowPassFilter',
    'ExpMovingAverage',
    'ExpMovingAverageVector3',
    # Fusion
    'OrientationTracker',
    'MotionState',
    'MotionSession',
    'MotionSessionRegistry',
    # Config
    'SystemConfig',
    'load_config',
]
