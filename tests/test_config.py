#!/usr/bin/env python3
"""
test_config.py - 시스템 설정 테스트

Author: FurSys AI Team
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parents[1]))

import pytest
import yaml

from padmotion.config import SystemConfig, load_config, create_default_config
from padmotion.config.system_config import FusionConfig, BiasConfig, ReplayConfig, OutputConfig


class TestDefaults:
    """기본값 테스트"""

    def test_fusion_defaults(self):
        config = SystemConfig()
        assert config.fusion.accel_correction == 0.05
        assert config.fusion.initial_gravity == (0.0, -1.0, 0.0)

    def test_bias_defaults(self):
        config = SystemConfig()
        assert config.bias.enabled
        assert config.bias.max_samples == 200
        assert config.bias.gyro_motion_threshold == 1.0
        assert config.bias.accel_motion_threshold == 0.1

    def test_output_defaults(self):
        config = SystemConfig()
        assert config.output.output_format == 'csv'
        assert config.smoothing.enabled is False


class TestValidation:
    """값 검증 테스트"""

    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_accel_correction_range(self, value):
        with pytest.raises(ValueError):
            FusionConfig(accel_correction=value)

    def test_initial_gravity_components(self):
        with pytest.raises(ValueError):
            FusionConfig(initial_gravity=(0.0, -1.0))

    def test_zero_initial_gravity(self):
        with pytest.raises(ValueError):
            FusionConfig(initial_gravity=(0.0, 0.0, 0.0))

    def test_negative_max_samples(self):
        with pytest.raises(ValueError):
            BiasConfig(max_samples=-1)

    def test_negative_threshold(self):
        with pytest.raises(ValueError):
            BiasConfig(gyro_motion_threshold=-1.0)

    def test_input_format(self):
        with pytest.raises(ValueError):
            ReplayConfig(input_format='parquet')

    def test_time_scale(self):
        with pytest.raises(ValueError):
            ReplayConfig(time_scale=0.0)

    def test_output_format(self):
        with pytest.raises(ValueError):
            OutputConfig(output_format='xml')


class TestLoadSave:
    """YAML 저장/로드 테스트"""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = SystemConfig()
        config.fusion.accel_correction = 0.1
        config.bias.max_samples = 0
        config.smoothing.enabled = True
        config.output.output_format = 'json'
        config.save(str(path))

        loaded = load_config(str(path))

        assert loaded.fusion.accel_correction == 0.1
        assert loaded.fusion.initial_gravity == (0.0, -1.0, 0.0)
        assert loaded.bias.max_samples == 0
        assert loaded.smoothing.enabled is True
        assert loaded.output.output_format == 'json'

    def test_saved_file_is_plain_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        SystemConfig().save(str(path))

        with open(path) as f:
            data = yaml.safe_load(f)

        assert data['fusion']['initial_gravity'] == [0.0, -1.0, 0.0]
        assert set(data) == {'fusion', 'bias', 'smoothing', 'replay', 'output'}

    def test_partial_file(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("bias:\n  gyro_motion_threshold: 2.5\n")

        config = load_config(str(path))

        assert config.bias.gyro_motion_threshold == 2.5
        assert config.bias.max_samples == 200
        assert config.fusion.accel_correction == 0.05

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config.fusion.accel_correction == 0.05

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)).bias.max_samples == 200

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("fusion:\n  accel_correction: 3.0\n")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_empty_section_uses_defaults(self, tmp_path):
        path = tmp_path / "sections.yaml"
        path.write_text("fusion:\nbias:\n  max_samples: 50\n")

        config = load_config(str(path))

        assert config.fusion.accel_correction == 0.05
        assert config.bias.max_samples == 50

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("fuson:\n  accel_correction: 0.2\n")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_from_dict_none(self):
        assert SystemConfig.from_dict(None).to_dict() == SystemConfig().to_dict()

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "default.yaml"
        config = create_default_config(str(path))

        assert path.exists()
        assert load_config(str(path)).to_dict() == config.to_dict()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
