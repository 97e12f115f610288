"""
moving_average.py - 지수 이동 평균 (바이어스 추정기)

샘플을 저장하지 않고 대량 샘플의 평균을 점진적으로 계산합니다.
샘플 수가 상한(max_n)에 도달하기 전에는 산술 평균,
도달한 이후에는 평활 계수 1/max_n 의 지수 이동 평균으로 동작하여
느린 바이어스 드리프트를 계속 추적합니다.

Version: 1.0
Author: FurSys AI Team
"""

from typing import Union

from ..geometry import Vector3

Value = Union[float, Vector3]


class ExpMovingAverage:
    """
    스칼라 지수 이동 평균

    Attributes:
        average: 현재 평균
        count: 평균 가중치 분모 n (max_n 에서 포화)
        total_updates: update() 호출 횟수
    """

    def __init__(self, initial: Value = 0.0):
        self._initial = initial
        self.average = initial
        self.count = 0
        self.total_updates = 0

    def update(self, new_value: Value, max_n: int = 0) -> Value:
        """
        새 샘플 반영

        Args:
            new_value: 새 샘플
            max_n: 평균에 반영할 최대 샘플 수 (0 이하면 무제한)

        Returns:
            갱신된 평균
        """
        if max_n <= 0 or self.count < max_n:
            self.count += 1

        self.average = self.average + (new_value - self.average) / self.count
        self.total_updates += 1
        return self.average

    def reset(self):
        """추정기 리셋"""
        self.average = self._initial
        self.count = 0
        self.total_updates = 0


class ExpMovingAverageVector3(ExpMovingAverage):
    """3D 벡터 지수 이동 평균"""

    def __init__(self, initial: Vector3 = Vector3(0.0, 0.0, 0.0)):
        super().__init__(initial)
