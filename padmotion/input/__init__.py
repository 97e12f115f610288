"""
input 모듈 - IMU 로그 로드
"""

from .imu_loader import ImuLogLoader, ImuSample

__all__ = ['ImuLogLoader', 'ImuSample']
