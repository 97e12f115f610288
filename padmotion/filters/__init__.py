"""
filters 모듈 - 신호 스무딩 및 바이어스 추정
"""

from .smoothing import LowPassFilter
from .moving_average import ExpMovingAverage, ExpMovingAverageVector3

__all__ = [
    'LowPassFilter',
    'ExpMovingAverage',
    'ExpMovingAverageVector3',
]
