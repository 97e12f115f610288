"""
quaternion.py - 회전 쿼터니언

표현: q = w + xi + yj + zk  (x, y, z, w) - scipy 순서
단위 쿼터니언 (0, 0, 0, 1) 이 항등 회전입니다.

연산 규칙:
- q1 * q2 : 해밀턴 곱 (비가환, 결합법칙 성립)
- q * v   : 벡터 회전 q ⊗ (v, 0) ⊗ q⁻¹
- v * q   : q * v 와 동일

정규화 정책:
- 노름이 0인 쿼터니언의 normalize()/inverse()는 항등 쿼터니언을 반환

외부 라이브러리와의 변환은 명시적 함수로만 제공합니다
(to_array/from_array, to_rotation/from_rotation, to_euler).

Version: 1.0
Author: FurSys AI Team
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from .vector import Vector3


@dataclass(frozen=True)
class Quaternion:
    """
    쿼터니언 (x, y, z, w)

    누적 회전은 곱셈마다 재정규화하지 않으므로
    장시간 사용 시 노름이 1에서 조금씩 벗어날 수 있습니다.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> 'Quaternion':
        """단위 쿼터니언 (회전 없음)"""
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_vector(cls, vec: Vector3, w: float = 0.0) -> 'Quaternion':
        """벡터부와 스칼라부로 생성"""
        return cls(vec.x, vec.y, vec.z, w)

    @classmethod
    def from_axis_angle(cls, axis: Vector3, angle_rad: float) -> 'Quaternion':
        """
        축-각도에서 생성

        Args:
            axis: 회전 축 (단위 벡터를 가정, 정규화하지 않음)
            angle_rad: 회전 각도 (라디안)
        """
        half = angle_rad * 0.5
        # 무한대 각도는 예외 대신 NaN 으로 전파
        with np.errstate(invalid='ignore'):
            sin_a = float(np.sin(half))
            cos_a = float(np.cos(half))
        return cls(
            axis.x * sin_a,
            axis.y * sin_a,
            axis.z * sin_a,
            cos_a
        )

    @property
    def vector(self) -> Vector3:
        """벡터부 (x, y, z)"""
        return Vector3(self.x, self.y, self.z)

    @property
    def norm_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    @property
    def norm(self) -> float:
        """쿼터니언 크기"""
        return math.sqrt(self.norm_squared)

    @property
    def is_unit(self) -> bool:
        return abs(self.norm - 1.0) < 1e-6

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.x, self.y, self.z, self.w))

    def dot(self, other: 'Quaternion') -> float:
        """내적"""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def conjugate(self) -> 'Quaternion':
        """켤레 쿼터니언"""
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def inverse(self) -> 'Quaternion':
        """역 쿼터니언: conjugate / |q|²"""
        ls = self.norm_squared
        if ls == 0.0:
            return Quaternion.identity()
        inv = 1.0 / ls
        return Quaternion(-self.x * inv, -self.y * inv, -self.z * inv, self.w * inv)

    def normalize(self) -> 'Quaternion':
        """단위 쿼터니언으로 정규화"""
        n = self.norm
        if n == 0.0:
            return Quaternion.identity()
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def rotate(self, vec: Vector3) -> Vector3:
        """벡터 회전: q ⊗ (v, 0) ⊗ q⁻¹"""
        rotated = self * Quaternion(vec.x, vec.y, vec.z, 0.0) * self.inverse()
        return Vector3(rotated.x, rotated.y, rotated.z)

    def angle_to(self, other: 'Quaternion') -> float:
        """다른 쿼터니언까지의 회전 각도 (도)"""
        d = abs(self.normalize().dot(other.normalize()))
        d = min(d, 1.0)
        return math.degrees(2.0 * math.acos(d))

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            # 해밀턴 곱: 벡터부 = l.v*r.w + r.v*l.w + l.v x r.v
            cx = self.y * other.z - self.z * other.y
            cy = self.z * other.x - self.x * other.z
            cz = self.x * other.y - self.y * other.x
            dot = self.x * other.x + self.y * other.y + self.z * other.z
            return Quaternion(
                self.x * other.w + other.x * self.w + cx,
                self.y * other.w + other.y * self.w + cy,
                self.z * other.w + other.z * self.w + cz,
                self.w * other.w - dot
            )
        if isinstance(other, Vector3):
            return self.rotate(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Vector3):
            return self.rotate(other)
        return NotImplemented

    # 외부 라이브러리 변환

    def to_array(self) -> np.ndarray:
        """[x, y, z, w] 형식 (scipy 표준)"""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def to_array_wxyz(self) -> np.ndarray:
        """[w, x, y, z] 형식 (일부 라이브러리용)"""
        return np.array([self.w, self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> 'Quaternion':
        """[x, y, z, w] 배열에서 생성"""
        if len(arr) != 4:
            raise ValueError(f"Expected 4 components, got {len(arr)}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]), float(arr[3]))

    def to_rotation(self) -> Rotation:
        """scipy Rotation 으로 변환 (scipy 내부에서 정규화됨)"""
        return Rotation.from_quat(self.to_array())

    @classmethod
    def from_rotation(cls, rot: Rotation) -> 'Quaternion':
        """scipy Rotation 에서 생성"""
        return cls.from_array(rot.as_quat())

    def to_euler(self, order: str = 'xyz', degrees: bool = True) -> np.ndarray:
        """
        오일러 각도 [roll, pitch, yaw] (표시용)

        Args:
            order: scipy 회전 순서 문자열
            degrees: True면 도 단위
        """
        if not self.is_finite:
            return np.full(3, np.nan)
        if self.norm_squared == 0.0:
            return np.zeros(3)
        return self.to_rotation().as_euler(order, degrees=degrees)

    def __repr__(self) -> str:
        return f"Quaternion(x={self.x:.4f}, y={self.y:.4f}, z={self.z:.4f}, w={self.w:.4f})"
