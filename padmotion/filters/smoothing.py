"""
smoothing.py - IMU 신호 저역 통과 필터

IMU 판독값의 고주파 노이즈와 극단값을 완화하는 지수 스무딩 필터입니다.

Version: 1.0
Author: FurSys AI Team
"""

from typing import Optional

from ..geometry import Vector3


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


class LowPassFilter:
    """
    단일/이중 샘플 지수 스무딩 필터

    상태:
        output: 이전 필터 출력 y
        previous_sample: 직전 호출의 원본 샘플 (이중 샘플 모드용)

    Example:
        >>> lpf = LowPassFilter.create()
        >>> smoothed = lpf.low_pass(sample, 0.3)
        >>> smoothed = lpf.low_pass(sample, 0.3, 0.2)
    """

    def __init__(self, initial: Optional[Vector3] = None):
        self.output = initial if initial is not None else Vector3.zero()
        self.previous_sample = Vector3.zero()

    @classmethod
    def create(cls) -> 'LowPassFilter':
        """새 필터 생성 (리맵 프로파일용 팩토리)"""
        return cls()

    def low_pass(
        self,
        sample: Vector3,
        strength: float,
        previous_strength: Optional[float] = None
    ) -> Vector3:
        """
        저역 통과 필터 적용

        단일 샘플:  y = (1 - s0)·y + s0·sample
        이중 샘플:  y = (1 - s0 - s1)·y + s0·sample + s1·prev_sample

        각 강도는 [0, 1]로 클램프됩니다. s0 + s1 > 1 이면
        출력이 평활화되지 않고 증폭될 수 있습니다 (재정규화 없음).

        Args:
            sample: 새 샘플
            strength: 새 샘플 가중치 s0 (0-1)
            previous_strength: 직전 샘플 가중치 s1 (0-1), None이면 단일 샘플 모드

        Returns:
            필터링된 값
        """
        s0 = _clamp01(strength)

        if previous_strength is None:
            self.output = (1.0 - s0) * self.output + s0 * sample
            return self.output

        s1 = _clamp01(previous_strength)
        self.output = (
            (1.0 - s0 - s1) * self.output
            + s0 * sample
            + s1 * self.previous_sample
        )
        self.previous_sample = sample
        return self.output

    def reset(self):
        """필터 리셋"""
        self.output = Vector3.zero()
        self.previous_sample = Vector3.zero()
