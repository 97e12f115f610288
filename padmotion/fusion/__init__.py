"""
fusion 모듈 - 6축 IMU 센서 퓨전

주요 기능:
- 상보 필터 기반 중력 방향/회전 추정
- 정지 샘플 기반 자이로/가속도 바이어스 추정
- 컨트롤러별 세션 관리
"""

from .orientation_tracker import OrientationTracker, MotionState
from .session import MotionSession, MotionSessionRegistry

__all__ = [
    'OrientationTracker',
    'MotionState',
    'MotionSession',
    'MotionSessionRegistry',
]
