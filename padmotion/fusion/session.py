"""
session.py - 컨트롤러별 모션 세션 관리

컨트롤러 연결 하나당 OrientationTracker 하나를 소유합니다.
- 연결 시 생성 (또는 첫 IMU 샘플 수신 시 지연 생성)
- 연결 유지 동안 순차 업데이트로만 상태 변경
- 연결 해제 시 폐기 (세션 간 상태 저장 없음)

세션 간 공유 가변 상태가 없으므로 컨트롤러 간 잠금은 필요하지 않습니다.
단, 한 세션에 대한 호출은 순차적이어야 합니다.

Version: 1.0
Author: FurSys AI Team
"""

from typing import Dict, Hashable, Iterator, Optional
import logging

from ..config.system_config import SystemConfig
from ..filters import LowPassFilter
from ..geometry import Vector3
from .orientation_tracker import OrientationTracker, MotionState

logger = logging.getLogger(__name__)


class MotionSession:
    """
    단일 컨트롤러의 IMU 처리 세션

    OrientationTracker 에 타임스탬프 → delta_time 변환과
    선형 가속도 출력 스무딩(선택)을 더합니다.
    """

    def __init__(self, controller_id: Hashable, config: Optional[SystemConfig] = None):
        self.controller_id = controller_id
        self.config = config or SystemConfig()

        fusion = self.config.fusion
        bias = self.config.bias
        self.tracker = OrientationTracker(
            accel_correction=fusion.accel_correction,
            max_samples=bias.max_samples,
            gyro_motion_threshold=bias.gyro_motion_threshold,
            accel_motion_threshold=bias.accel_motion_threshold,
            initial_gravity=Vector3(*fusion.initial_gravity)
        )

        self._smoother: Optional[LowPassFilter] = None
        if self.config.smoothing.enabled:
            self._smoother = LowPassFilter.create()

        self.smoothed_accel = Vector3.zero()
        self.tick_count = 0

    def process(
        self,
        accel: Vector3,
        gyro: Vector3,
        timestamp: Optional[float] = None,
        delta_time: Optional[float] = None
    ) -> MotionState:
        """
        IMU 샘플 한 쌍 처리

        timestamp 와 delta_time 중 하나를 전달합니다.
        delta_time 이 주어지면 우선 사용하며, 타임스탬프가 없으면
        직전 타임스탬프에 delta_time 을 더한 값을 기록합니다.
        타임스탬프가 역행하면 경고 후 delta_time = 0 으로 처리합니다.

        Args:
            accel: 가속도
            gyro: 각속도 (도/s)
            timestamp: 단조 증가 타임스탬프 (초)
            delta_time: 경과 시간 (초)

        Returns:
            처리 결과 스냅샷
        """
        if delta_time is None:
            delta_time = self._delta_from(timestamp)
        else:
            if timestamp is None and self.tracker.last_update_timestamp is not None:
                timestamp = self.tracker.last_update_timestamp + delta_time
            if timestamp is not None:
                self.tracker.last_update_timestamp = timestamp

        if self.config.bias.enabled:
            self.tracker.process_raw_imu(accel, gyro, delta_time)
        else:
            self.tracker.update(accel, gyro, delta_time)

        if self._smoother is not None:
            smoothing = self.config.smoothing
            self.smoothed_accel = self._smoother.low_pass(
                self.tracker.filtered_accel,
                smoothing.strength,
                smoothing.previous_strength
            )
        else:
            self.smoothed_accel = self.tracker.filtered_accel

        self.tick_count += 1
        return self.tracker.get_state(timestamp)

    def _delta_from(self, timestamp: Optional[float]) -> float:
        if timestamp is None:
            raise ValueError("Either timestamp or delta_time is required")

        if self.tracker.last_update_timestamp is None:
            delta_time = 0.0
        else:
            delta_time = timestamp - self.tracker.last_update_timestamp
            if delta_time < 0:
                logger.warning(
                    f"Non-monotonic timestamp on controller {self.controller_id}: "
                    f"{timestamp} < {self.tracker.last_update_timestamp}, using delta_time=0"
                )
                delta_time = 0.0

        self.tracker.last_update_timestamp = timestamp
        return delta_time

    @property
    def state(self) -> MotionState:
        return self.tracker.get_state()


class MotionSessionRegistry:
    """
    컨트롤러 ID → MotionSession 레지스트리

    Example:
        >>> registry = MotionSessionRegistry(config)
        >>> registry.connect("pad-0")
        >>> state = registry.process("pad-0", accel, gyro, timestamp=t)
        >>> registry.disconnect("pad-0")
    """

    def __init__(self, config: Optional[SystemConfig] = None):
        self.config = config or SystemConfig()
        self._sessions: Dict[Hashable, MotionSession] = {}

    def connect(self, controller_id: Hashable) -> MotionSession:
        """컨트롤러 연결 (이미 연결되어 있으면 기존 세션 반환)"""
        session = self._sessions.get(controller_id)
        if session is None:
            session = MotionSession(controller_id, self.config)
            self._sessions[controller_id] = session
            logger.info(f"Motion session created for controller {controller_id}")
        return session

    def disconnect(self, controller_id: Hashable) -> bool:
        """
        컨트롤러 연결 해제

        Returns:
            세션이 존재했으면 True
        """
        session = self._sessions.pop(controller_id, None)
        if session is None:
            logger.warning(f"Disconnect for unknown controller {controller_id}")
            return False

        logger.info(
            f"Motion session closed for controller {controller_id} "
            f"after {session.tick_count} ticks"
        )
        return True

    def get(self, controller_id: Hashable) -> Optional[MotionSession]:
        return self._sessions.get(controller_id)

    def process(
        self,
        controller_id: Hashable,
        accel: Vector3,
        gyro: Vector3,
        timestamp: Optional[float] = None,
        delta_time: Optional[float] = None
    ) -> MotionState:
        """IMU 샘플 처리 (세션이 없으면 지연 생성)"""
        session = self.connect(controller_id)
        return session.process(accel, gyro, timestamp=timestamp, delta_time=delta_time)

    def __contains__(self, controller_id: Hashable) -> bool:
        return controller_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._sessions))
