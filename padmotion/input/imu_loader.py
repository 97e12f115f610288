"""
imu_loader.py - IMU 로그 로더

CSV 로 기록된 IMU 데이터를 (타임스탬프, 가속도, 각속도) 틱 단위로 로드합니다.

지원 형식:
1. wide: 한 행에 한 틱
   timestamp, ax, ay, az, gx, gy, gz
2. long: 한 행에 센서 하나 (RealSense 기록 형식)
   type(accel|gyro), x, y, z, rel_time
   → 자이로 행을 틱으로 사용하고 가장 가까운 시간의 가속도 행을 짝지음

Version: 1.0
Author: FurSys AI Team
"""

import math
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Iterator, Optional
from pathlib import Path
import logging

from ..geometry import Vector3

logger = logging.getLogger(__name__)

WIDE_COLUMNS = ['timestamp', 'ax', 'ay', 'az', 'gx', 'gy', 'gz']
LONG_COLUMNS = ['type', 'x', 'y', 'z']


@dataclass
class ImuSample:
    """단일 IMU 틱"""
    index: int
    timestamp: float     # 초
    accel: Vector3
    gyro: Vector3        # 도/s


class ImuLogLoader:
    """
    IMU CSV 로그 로더

    Example:
        >>> loader = ImuLogLoader("./session/imu_data.csv")
        >>> for sample in loader:
        ...     session.process(sample.accel, sample.gyro, timestamp=sample.timestamp)
    """

    def __init__(
        self,
        log_path: str,
        input_format: str = 'auto',
        gyro_in_radians: bool = False,
        accel_scale: float = 1.0,
        time_scale: float = 1.0
    ):
        """
        Args:
            log_path: CSV 파일 경로
            input_format: 'auto', 'wide' 또는 'long'
            gyro_in_radians: 자이로가 rad/s 로 기록된 경우 True
            accel_scale: 가속도 배율 (m/s² 로그 → g 단위: 1/9.80665)
            time_scale: 타임스탬프 배율 (초 단위로 변환)
        """
        self.log_path = Path(log_path)
        self.gyro_in_radians = gyro_in_radians
        self.accel_scale = accel_scale
        self.time_scale = time_scale

        if not self.log_path.exists():
            raise FileNotFoundError(f"IMU log not found: {log_path}")

        raw_df = pd.read_csv(self.log_path)
        self.input_format = self._detect_format(raw_df, input_format)

        if self.input_format == 'wide':
            self.df = self._load_wide(raw_df)
        else:
            self.df = self._load_long(raw_df)

        self.num_samples = len(self.df)

        logger.info(f"ImuLogLoader: {self.num_samples} samples, format={self.input_format}")

    def _detect_format(self, df: pd.DataFrame, input_format: str) -> str:
        """로그 형식 감지"""
        if input_format != 'auto':
            return input_format

        if set(WIDE_COLUMNS).issubset(df.columns):
            return 'wide'
        if set(LONG_COLUMNS).issubset(df.columns):
            return 'long'

        raise ValueError(
            f"Unrecognized IMU log columns: {list(df.columns)} "
            f"(expected {WIDE_COLUMNS} or {LONG_COLUMNS} + rel_time)"
        )

    def _load_wide(self, df: pd.DataFrame) -> pd.DataFrame:
        """wide 형식 로드"""
        missing = [c for c in WIDE_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Missing columns in wide IMU log: {missing}")

        return df[WIDE_COLUMNS].sort_values('timestamp').reset_index(drop=True)

    def _load_long(self, df: pd.DataFrame) -> pd.DataFrame:
        """long 형식 로드 및 가속도/자이로 짝짓기"""
        missing = [c for c in LONG_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Missing columns in long IMU log: {missing}")

        time_col = 'rel_time' if 'rel_time' in df.columns else 'timestamp'
        if time_col not in df.columns:
            raise ValueError("Long IMU log needs a 'rel_time' or 'timestamp' column")

        accel_df = df[df['type'] == 'accel'][[time_col, 'x', 'y', 'z']].sort_values(time_col)
        gyro_df = df[df['type'] == 'gyro'][[time_col, 'x', 'y', 'z']].sort_values(time_col)

        if len(accel_df) == 0 or len(gyro_df) == 0:
            raise ValueError("Long IMU log needs both 'accel' and 'gyro' rows")

        merged = pd.merge_asof(
            gyro_df.rename(columns={'x': 'gx', 'y': 'gy', 'z': 'gz'}),
            accel_df.rename(columns={'x': 'ax', 'y': 'ay', 'z': 'az'}),
            on=time_col,
            direction='nearest'
        )
        merged = merged.rename(columns={time_col: 'timestamp'})

        logger.debug(f"Paired {len(gyro_df)} gyro rows with {len(accel_df)} accel rows")

        return merged[WIDE_COLUMNS].reset_index(drop=True)

    def __len__(self) -> int:
        return self.num_samples

    def __getitem__(self, idx: int) -> ImuSample:
        return self.load_sample(idx)

    def __iter__(self) -> Iterator[ImuSample]:
        for idx in range(self.num_samples):
            yield self.load_sample(idx)

    def load_sample(self, idx: int) -> ImuSample:
        """틱 로드"""
        if idx < 0 or idx >= self.num_samples:
            raise IndexError(f"Sample index {idx} out of range")

        row = self.df.iloc[idx]

        gyro_scale = 180.0 / math.pi if self.gyro_in_radians else 1.0

        return ImuSample(
            index=idx,
            timestamp=float(row['timestamp']) * self.time_scale,
            accel=Vector3(
                float(row['ax']) * self.accel_scale,
                float(row['ay']) * self.accel_scale,
                float(row['az']) * self.accel_scale
            ),
            gyro=Vector3(
                float(row['gx']) * gyro_scale,
                float(row['gy']) * gyro_scale,
                float(row['gz']) * gyro_scale
            )
        )

    def get_duration(self) -> Optional[float]:
        """로그 길이 (초)"""
        if self.num_samples == 0:
            return None
        timestamps = self.df['timestamp'].to_numpy(dtype=np.float64) * self.time_scale
        return float(timestamps[-1] - timestamps[0])
