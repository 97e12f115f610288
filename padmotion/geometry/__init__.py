"""
geometry 모듈 - 벡터/쿼터니언 수학 커널

IMU 센서 퓨전에 필요한 불변 값 타입을 제공합니다.
numpy/scipy 와의 변환은 명시적 함수(to_array, from_array,
to_rotation, from_rotation)로만 이루어집니다.
"""

from .vector import Vector2, Vector3
from .quaternion import Quaternion

__all__ = [
    'Vector2',
    'Vector3',
    'Quaternion',
]
