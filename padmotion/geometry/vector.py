"""
vector.py - 2D/3D 벡터 값 타입

IMU 계산에 사용하는 불변(immutable) 벡터 타입입니다.
모든 연산은 새 인스턴스를 반환하며 입력을 변경하지 않습니다.

정규화 정책:
- 길이가 0인 벡터의 normalize()는 영벡터를 반환합니다 (NaN/Inf 없음)

스칼라 연산:
- s * v == v * s
- s / v == v / s  (스칼라 나눗셈은 양방향 모두 v / s 로 처리)

Version: 1.0
Author: FurSys AI Team
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Sequence

import numpy as np


@dataclass(frozen=True)
class Vector2:
    """
    2D 벡터 (터치패드 좌표/크기 등)

    Attributes:
        x: X 성분
        y: Y 성분
    """
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def zero(cls) -> 'Vector2':
        return cls(0.0, 0.0)

    @classmethod
    def fill(cls, value: float) -> 'Vector2':
        """모든 성분이 같은 값인 벡터"""
        return cls(value, value)

    @property
    def length(self) -> float:
        """유클리드 노름"""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def dot(self, other: 'Vector2') -> float:
        return self.x * other.x + self.y * other.y

    def normalize(self) -> 'Vector2':
        """단위 벡터 (길이 0이면 영벡터)"""
        length = self.length
        if length == 0.0:
            return Vector2(0.0, 0.0)
        return Vector2(self.x / length, self.y / length)

    def to_array(self) -> np.ndarray:
        """numpy 배열로 변환 [x, y]"""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> 'Vector2':
        """[x, y] 배열에서 생성"""
        if len(arr) != 2:
            raise ValueError(f"Expected 2 components, got {len(arr)}")
        return cls(float(arr[0]), float(arr[1]))

    def __add__(self, other: 'Vector2') -> 'Vector2':
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other) -> 'Vector2':
        if isinstance(other, Vector2):
            return Vector2(self.x * other.x, self.y * other.y)
        if isinstance(other, Real):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other) -> 'Vector2':
        return self.__mul__(other)

    def __truediv__(self, other) -> 'Vector2':
        if isinstance(other, Vector2):
            return Vector2(self.x / other.x, self.y / other.y)
        if isinstance(other, Real):
            return Vector2(self.x / other, self.y / other)
        return NotImplemented

    def __rtruediv__(self, other) -> 'Vector2':
        if isinstance(other, Real):
            return self.__truediv__(other)
        return NotImplemented

    def __neg__(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def __repr__(self) -> str:
        return f"Vector2(x={self.x:.4f}, y={self.y:.4f})"


@dataclass(frozen=True)
class Vector3:
    """
    3D 벡터 (가속도, 각속도, 중력 방향)

    Attributes:
        x: X 성분
        y: Y 성분
        z: Z 성분
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> 'Vector3':
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def fill(cls, value: float) -> 'Vector3':
        """모든 성분이 같은 값인 벡터"""
        return cls(value, value, value)

    @property
    def length(self) -> float:
        """유클리드 노름"""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    @property
    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def dot(self, other: 'Vector3') -> float:
        """내적"""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Vector3') -> 'Vector3':
        """외적 (오른손 좌표계)"""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def normalize(self) -> 'Vector3':
        """
        단위 벡터로 정규화

        길이가 정확히 0이면 영벡터를 반환합니다.
        """
        length = self.length
        if length == 0.0:
            return Vector3(0.0, 0.0, 0.0)
        return Vector3(self.x / length, self.y / length, self.z / length)

    def to_array(self) -> np.ndarray:
        """numpy 배열로 변환 [x, y, z]"""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> 'Vector3':
        """[x, y, z] 배열에서 생성"""
        if len(arr) != 3:
            raise ValueError(f"Expected 3 components, got {len(arr)}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def __add__(self, other: 'Vector3') -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other) -> 'Vector3':
        # Quaternion 과의 곱은 Quaternion.__rmul__ 에서 처리
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, Real):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other) -> 'Vector3':
        return self.__mul__(other)

    def __truediv__(self, other) -> 'Vector3':
        if isinstance(other, Vector3):
            return Vector3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, Real):
            return Vector3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __rtruediv__(self, other) -> 'Vector3':
        if isinstance(other, Real):
            return self.__truediv__(other)
        return NotImplemented

    def __neg__(self) -> 'Vector3':
        return Vector3(-self.x, -self.y, -self.z)

    def __repr__(self) -> str:
        return f"Vector3(x={self.x:.4f}, y={self.y:.4f}, z={self.z:.4f})"
