"""
orientation_tracker.py - 6축 IMU 방향 추적기 (상보 필터)

가속도계와 자이로스코프를 융합하여 다음을 추정합니다:
- 중력 방향 (센서 좌표계)
- 누적 회전 / 직전 대비 회전 (쿼터니언)
- 중력이 제거된 선형 가속도 (센서 좌표계)

처리 순서 (update):
1. 자이로 각속도(도/s) → 축-각도 델타 회전
2. 델타 회전의 역으로 중력 추정치를 현재 센서 좌표계로 이동
3. 정규화된 가속도와 상보 필터로 혼합
4. 누적 회전 = 누적 회전 ⊗ 델타 회전 (로컬 좌표계 합성)
5. 선형 가속도 = 가속도 - 중력

시간 간격은 호출 측이 명시적으로 전달합니다 (벽시계 시간 사용 안함).

수치 정책:
- 예외를 발생시키지 않습니다
- NaN/Inf 입력은 걸러내지 않고 그대로 전파됩니다 (garbage in, garbage out)

동시성: 인스턴스 하나는 컨트롤러 하나에 대응하며, 호출은 순차적이어야 합니다.

Version: 1.0
Author: FurSys AI Team
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from ..geometry import Quaternion, Vector3
from ..filters import ExpMovingAverageVector3

logger = logging.getLogger(__name__)

DEG_TO_RAD = math.pi / 180.0

DEFAULT_ACCEL_CORRECTION = 0.05
DEFAULT_MAX_SAMPLES = 200
DEFAULT_GYRO_MOTION_THRESHOLD = 1.0
DEFAULT_ACCEL_MOTION_THRESHOLD = 0.1
DEFAULT_GRAVITY = Vector3(0.0, -1.0, 0.0)


def _vec_dict(v: Vector3) -> Dict[str, float]:
    return {'x': v.x, 'y': v.y, 'z': v.z}


def _quat_dict(q: Quaternion) -> Dict[str, float]:
    return {'x': q.x, 'y': q.y, 'z': q.z, 'w': q.w}


@dataclass(frozen=True)
class MotionState:
    """
    한 틱의 IMU 처리 결과 스냅샷

    Attributes:
        filtered_accel: 중력 보정된 선형 가속도 (센서 좌표계)
        total_rotation: 누적 회전
        delta_rotation: 직전 업데이트 대비 회전
        gravity: 중력 방향 추정치 (단위 벡터)
        raw_accel: 바이어스 보정된 가속도 입력
        raw_gyro: 바이어스 보정된 자이로 입력 (도/s)
        accel_bias: 가속도 바이어스 추정치
        gyro_bias: 자이로 바이어스 추정치
        accel_bias_samples: 가속도 바이어스 유효 샘플 수
        gyro_bias_samples: 자이로 바이어스 유효 샘플 수
        delta_time: 업데이트 시간 간격 (초)
        timestamp: 업데이트 타임스탬프 (초, 없으면 None)
    """
    filtered_accel: Vector3
    total_rotation: Quaternion
    delta_rotation: Quaternion
    gravity: Vector3
    raw_accel: Vector3
    raw_gyro: Vector3
    accel_bias: Vector3
    gyro_bias: Vector3
    accel_bias_samples: int
    gyro_bias_samples: int
    delta_time: float
    timestamp: Optional[float] = None

    @property
    def euler(self):
        """누적 회전의 오일러 각도 [roll, pitch, yaw] (도)"""
        return self.total_rotation.to_euler('xyz', degrees=True)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        roll, pitch, yaw = (float(a) for a in self.euler)
        return {
            'timestamp': self.timestamp,
            'delta_time': self.delta_time,
            'accel': _vec_dict(self.filtered_accel),
            'gravity': _vec_dict(self.gravity),
            'rotation': {
                'total': _quat_dict(self.total_rotation),
                'delta': _quat_dict(self.delta_rotation),
                'euler': {'roll': roll, 'pitch': pitch, 'yaw': yaw}
            },
            'raw': {
                'accel': _vec_dict(self.raw_accel),
                'gyro': _vec_dict(self.raw_gyro)
            },
            'bias': {
                'accel': _vec_dict(self.accel_bias),
                'gyro': _vec_dict(self.gyro_bias),
                'accel_samples': self.accel_bias_samples,
                'gyro_samples': self.gyro_bias_samples
            }
        }

    def to_row(self) -> Dict[str, Any]:
        """CSV 저장용 평탄화된 행"""
        roll, pitch, yaw = (float(a) for a in self.euler)
        return {
            'timestamp': self.timestamp,
            'delta_time': self.delta_time,
            'accel_x': self.filtered_accel.x,
            'accel_y': self.filtered_accel.y,
            'accel_z': self.filtered_accel.z,
            'gravity_x': self.gravity.x,
            'gravity_y': self.gravity.y,
            'gravity_z': self.gravity.z,
            'rot_x': self.total_rotation.x,
            'rot_y': self.total_rotation.y,
            'rot_z': self.total_rotation.z,
            'rot_w': self.total_rotation.w,
            'delta_x': self.delta_rotation.x,
            'delta_y': self.delta_rotation.y,
            'delta_z': self.delta_rotation.z,
            'delta_w': self.delta_rotation.w,
            'roll': roll,
            'pitch': pitch,
            'yaw': yaw,
            'gyro_bias_x': self.gyro_bias.x,
            'gyro_bias_y': self.gyro_bias.y,
            'gyro_bias_z': self.gyro_bias.z,
            'accel_bias_x': self.accel_bias.x,
            'accel_bias_y': self.accel_bias.y,
            'accel_bias_z': self.accel_bias.z,
        }


class OrientationTracker:
    """
    상보 필터 기반 방향 추적기

    자이로 적분으로 얻은 중력 방향을 가속도계 측정값으로 조금씩 보정하고,
    정지 상태로 판단되는 샘플로 센서 바이어스를 추정합니다.

    Example:
        >>> tracker = OrientationTracker(accel_correction=0.05)
        >>> tracker.process_raw_imu(accel, gyro, delta_time=0.01)
        >>> print(tracker.total_rotation, tracker.filtered_accel)
    """

    def __init__(
        self,
        accel_correction: float = DEFAULT_ACCEL_CORRECTION,
        max_samples: int = DEFAULT_MAX_SAMPLES,
        gyro_motion_threshold: float = DEFAULT_GYRO_MOTION_THRESHOLD,
        accel_motion_threshold: float = DEFAULT_ACCEL_MOTION_THRESHOLD,
        initial_gravity: Vector3 = DEFAULT_GRAVITY
    ):
        """
        Args:
            accel_correction: 가속도계 보정 가중치 (0-1)
                - 높을수록 가속도계를 신뢰, 빠르게 수렴하지만 노이즈 증가
                - 낮을수록 자이로를 신뢰, 부드럽지만 드리프트 가능
            max_samples: 바이어스 평균 윈도우 상한 (0이면 무제한)
            gyro_motion_threshold: 자이로 정지 판정 임계값 (도/s)
            accel_motion_threshold: 가속도 정지 판정 임계값
            initial_gravity: 초기 중력 방향
        """
        self.accel_correction = accel_correction
        self.max_samples = max_samples
        self.gyro_motion_threshold = gyro_motion_threshold
        self.accel_motion_threshold = accel_motion_threshold
        self._initial_gravity = initial_gravity.normalize()

        self.gyro_bias = ExpMovingAverageVector3()
        self.accel_bias = ExpMovingAverageVector3()

        self._reset_state()

        logger.debug(
            f"OrientationTracker initialized: accel_correction={accel_correction}, "
            f"max_samples={max_samples}"
        )

    def _reset_state(self):
        self.gravity = self._initial_gravity
        self.total_rotation = Quaternion.identity()
        self.delta_rotation = Quaternion.identity()
        self.filtered_accel = Vector3.zero()
        self.raw_accel = Vector3.zero()
        self.raw_gyro = Vector3.zero()
        self.last_raw_gyro = Vector3.zero()
        self.last_raw_accel = Vector3.zero()
        self.delta_time = 0.0
        self.last_update_timestamp: Optional[float] = None

    def update(self, accel: Vector3, gyro: Vector3, delta_time: float) -> Vector3:
        """
        퓨전 단계

        Args:
            accel: 가속도 (정지 시 크기 ≈ 1, 방향 (0,-1,0))
            gyro: 각속도 (도/s)
            delta_time: 직전 호출 이후 경과 시간 (초)

        Returns:
            중력 보정된 선형 가속도
        """
        self.delta_time = delta_time

        angle_speed = gyro.length * DEG_TO_RAD
        angle = angle_speed * delta_time
        unit_accel = accel.normalize()

        # 회전이 없으면 직전 델타 회전을 유지
        if angle != 0:
            self.delta_rotation = Quaternion.from_axis_angle(gyro.normalize(), angle).normalize()

        gravity = self.delta_rotation.inverse().rotate(self.gravity)

        c = self.accel_correction
        self.gravity = ((1.0 - c) * gravity + c * unit_accel).normalize()

        self.total_rotation = self.total_rotation * self.delta_rotation

        # 센서 좌표계 기준 (total_rotation 으로 회전하지 않음)
        self.filtered_accel = accel - self.gravity
        return self.filtered_accel

    def update_at(self, accel: Vector3, gyro: Vector3, timestamp: float) -> Vector3:
        """
        타임스탬프 기반 퓨전 단계

        첫 호출은 delta_time = 0 으로 처리됩니다.

        Args:
            timestamp: 단조 증가 타임스탬프 (초)
        """
        delta_time = self._delta_from(timestamp)
        return self.update(accel, gyro, delta_time)

    def process_raw_imu(
        self,
        accel: Vector3,
        gyro: Vector3,
        delta_time: float,
        max_samples: Optional[int] = None,
        gyro_motion_threshold: Optional[float] = None,
        accel_motion_threshold: Optional[float] = None
    ) -> Vector3:
        """
        바이어스 보정 후 퓨전

        1. 연속 자이로 샘플 차이가 임계값 미만이면 자이로 바이어스 갱신
        2. 바이어스 추정치를 빼서 보정
        3. update() 수행
        4. 연속 선형 가속도 차이가 임계값 미만이면 가속도 바이어스 갱신

        Args:
            accel: 원본 가속도
            gyro: 원본 각속도 (도/s)
            delta_time: 경과 시간 (초)
            max_samples: 바이어스 윈도우 상한 (None이면 생성자 값)
            gyro_motion_threshold: 자이로 정지 임계값 (None이면 생성자 값)
            accel_motion_threshold: 가속도 정지 임계값 (None이면 생성자 값)

        Returns:
            중력 보정된 선형 가속도
        """
        if max_samples is None:
            max_samples = self.max_samples
        if gyro_motion_threshold is None:
            gyro_motion_threshold = self.gyro_motion_threshold
        if accel_motion_threshold is None:
            accel_motion_threshold = self.accel_motion_threshold

        if (gyro - self.last_raw_gyro).length < gyro_motion_threshold:
            self.gyro_bias.update(gyro, max_samples)

        self.last_raw_gyro = gyro

        self.raw_accel = accel - self.accel_bias.average
        self.raw_gyro = gyro - self.gyro_bias.average

        self.update(self.raw_accel, self.raw_gyro, delta_time)

        if (self.filtered_accel - self.last_raw_accel).length < accel_motion_threshold:
            self.accel_bias.update(self.filtered_accel, max_samples)

        self.last_raw_accel = self.filtered_accel
        return self.filtered_accel

    def process_raw_imu_at(self, accel: Vector3, gyro: Vector3, timestamp: float, **kwargs) -> Vector3:
        """타임스탬프 기반 process_raw_imu"""
        delta_time = self._delta_from(timestamp)
        return self.process_raw_imu(accel, gyro, delta_time, **kwargs)

    def _delta_from(self, timestamp: float) -> float:
        if self.last_update_timestamp is None:
            delta_time = 0.0
        else:
            delta_time = timestamp - self.last_update_timestamp
        self.last_update_timestamp = timestamp
        return delta_time

    def world_accel(self) -> Vector3:
        """
        선형 가속도를 누적 회전으로 초기 좌표계에 투영

        퓨전 단계의 filtered_accel 은 센서 좌표계 기준이며 이 값은 사용하지 않습니다.
        """
        return self.total_rotation.rotate(self.filtered_accel)

    def get_state(self, timestamp: Optional[float] = None) -> MotionState:
        """현재 상태 스냅샷"""
        if timestamp is None:
            timestamp = self.last_update_timestamp
        return MotionState(
            filtered_accel=self.filtered_accel,
            total_rotation=self.total_rotation,
            delta_rotation=self.delta_rotation,
            gravity=self.gravity,
            raw_accel=self.raw_accel,
            raw_gyro=self.raw_gyro,
            accel_bias=self.accel_bias.average,
            gyro_bias=self.gyro_bias.average,
            accel_bias_samples=self.accel_bias.count,
            gyro_bias_samples=self.gyro_bias.count,
            delta_time=self.delta_time,
            timestamp=timestamp
        )

    def reset(self, keep_bias: bool = False):
        """
        추적 리셋

        Args:
            keep_bias: True면 바이어스 추정치 유지
        """
        self._reset_state()
        if not keep_bias:
            self.gyro_bias.reset()
            self.accel_bias.reset()
        logger.debug(f"OrientationTracker reset (keep_bias={keep_bias})")
