#!/usr/bin/env python3
"""
test_imu_loader.py - IMU CSV 로그 로더 테스트

Author: FurSys AI Team
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parents[1]))

import math

import pandas as pd
import pytest

from padmotion.geometry import Vector3
from padmotion.input import ImuLogLoader, ImuSample


@pytest.fixture
def wide_log(tmp_path):
    path = tmp_path / "imu_wide.csv"
    pd.DataFrame({
        'timestamp': [0.02, 0.0, 0.01],
        'ax': [0.0, 0.0, 0.1],
        'ay': [-1.0, -1.0, -0.9],
        'az': [0.0, 0.0, 0.0],
        'gx': [0.0, 0.0, 0.0],
        'gy': [90.0, 0.0, 45.0],
        'gz': [0.0, 0.0, 0.0],
    }).to_csv(path, index=False)
    return path


@pytest.fixture
def long_log(tmp_path):
    path = tmp_path / "imu_data.csv"
    pd.DataFrame({
        'type': ['gyro', 'accel', 'gyro', 'accel', 'accel', 'gyro'],
        'x': [0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        'y': [0.1, -1.0, 0.2, -1.1, -1.2, 0.3],
        'z': [0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        'rel_time': [0.0, 0.001, 0.01, 0.012, 0.019, 0.02],
    }).to_csv(path, index=False)
    return path


class TestWideFormat:
    """wide 형식 테스트"""

    def test_detect_and_sort(self, wide_log):
        loader = ImuLogLoader(str(wide_log))

        assert loader.input_format == 'wide'
        assert len(loader) == 3
        assert [s.timestamp for s in loader] == pytest.approx([0.0, 0.01, 0.02])

    def test_load_sample(self, wide_log):
        loader = ImuLogLoader(str(wide_log))
        sample = loader[2]

        assert isinstance(sample, ImuSample)
        assert sample.index == 2
        assert sample.accel == Vector3(0.0, -1.0, 0.0)
        assert sample.gyro == Vector3(0.0, 90.0, 0.0)

    def test_duration(self, wide_log):
        loader = ImuLogLoader(str(wide_log))
        assert loader.get_duration() == pytest.approx(0.02)

    def test_index_out_of_range(self, wide_log):
        loader = ImuLogLoader(str(wide_log))
        with pytest.raises(IndexError):
            loader.load_sample(3)
        with pytest.raises(IndexError):
            loader.load_sample(-1)

    def test_unit_conversion(self, wide_log):
        loader = ImuLogLoader(
            str(wide_log), gyro_in_radians=True, accel_scale=2.0, time_scale=1000.0
        )
        sample = loader[1]

        assert sample.gyro.y == pytest.approx(math.degrees(45.0))
        assert sample.accel.y == pytest.approx(-1.8)
        assert sample.timestamp == pytest.approx(10.0)


class TestLongFormat:
    """long 형식 테스트"""

    def test_pairs_nearest_accel(self, long_log):
        loader = ImuLogLoader(str(long_log))

        assert loader.input_format == 'long'
        assert len(loader) == 3

        samples = list(loader)
        assert [s.gyro.y for s in samples] == pytest.approx([0.1, 0.2, 0.3])
        assert [s.accel.y for s in samples] == pytest.approx([-1.0, -1.1, -1.2])
        assert [s.timestamp for s in samples] == pytest.approx([0.0, 0.01, 0.02])

    def test_missing_sensor_rows(self, tmp_path):
        path = tmp_path / "gyro_only.csv"
        pd.DataFrame({
            'type': ['gyro', 'gyro'],
            'x': [0.0, 0.0], 'y': [0.0, 0.0], 'z': [0.0, 0.0],
            'rel_time': [0.0, 0.01],
        }).to_csv(path, index=False)

        with pytest.raises(ValueError):
            ImuLogLoader(str(path))


class TestLoaderErrors:
    """오류 처리 테스트"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImuLogLoader(str(tmp_path / "nope.csv"))

    def test_unrecognized_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        pd.DataFrame({'a': [1], 'b': [2]}).to_csv(path, index=False)

        with pytest.raises(ValueError):
            ImuLogLoader(str(path))

    def test_forced_format_missing_columns(self, wide_log):
        with pytest.raises(ValueError):
            ImuLogLoader(str(wide_log), input_format='long')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
