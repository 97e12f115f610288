"""
system_config.py - 시스템 설정 관리

padmotion 시스템의 모든 설정을 통합 관리합니다.
퓨전 가중치와 모션 감지 임계값은 코드 상수가 아닌 설정값으로 노출됩니다.

Version: 1.0
Author: FurSys AI Team
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('csv', 'json')
INPUT_FORMATS = ('auto', 'wide', 'long')


@dataclass
class FusionConfig:
    """상보 필터 설정"""
    # 가속도계 보정 가중치 (자이로 전파 중력 대비)
    accel_correction: float = 0.05

    # 정지 상태 중력 방향 (Y-down)
    initial_gravity: tuple = (0.0, -1.0, 0.0)

    def __post_init__(self):
        if not 0.0 <= self.accel_correction <= 1.0:
            raise ValueError(f"accel_correction must be in [0, 1], got {self.accel_correction}")
        self.initial_gravity = tuple(float(v) for v in self.initial_gravity)
        if len(self.initial_gravity) != 3:
            raise ValueError(f"initial_gravity must have 3 components, got {len(self.initial_gravity)}")
        if not any(self.initial_gravity):
            raise ValueError("initial_gravity must be non-zero")


@dataclass
class BiasConfig:
    """바이어스 추정 설정"""
    enabled: bool = True

    # 평균 윈도우 상한 (0이면 무제한)
    max_samples: int = 200

    # 정지 판정 임계값
    gyro_motion_threshold: float = 1.0   # deg/s (연속 샘플 차이)
    accel_motion_threshold: float = 0.1  # g (연속 선형 가속도 차이)

    def __post_init__(self):
        if self.max_samples < 0:
            raise ValueError(f"max_samples must be >= 0, got {self.max_samples}")
        if self.gyro_motion_threshold < 0 or self.accel_motion_threshold < 0:
            raise ValueError("Motion thresholds must be non-negative")


@dataclass
class SmoothingConfig:
    """선형 가속도 출력 스무딩 설정"""
    enabled: bool = False
    strength: float = 0.5
    previous_strength: Optional[float] = None


@dataclass
class ReplayConfig:
    """IMU 로그 재생 설정"""
    input_format: str = "auto"  # "auto", "wide" or "long"
    gyro_in_radians: bool = False
    accel_scale: float = 1.0     # m/s² 로그면 1/9.80665
    time_scale: float = 1.0      # 타임스탬프 → 초 (ns 로그면 1e-9)

    def __post_init__(self):
        if self.input_format not in INPUT_FORMATS:
            raise ValueError(f"Unknown input_format: {self.input_format}")
        if self.time_scale <= 0:
            raise ValueError(f"time_scale must be positive, got {self.time_scale}")


@dataclass
class OutputConfig:
    """출력 설정"""
    # 저장 옵션
    save_results: bool = True
    output_dir: str = "output"
    output_format: str = "csv"  # "csv" or "json"

    # 로깅
    log_level: str = "INFO"
    log_to_file: bool = False

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output_format: {self.output_format}")


@dataclass
class SystemConfig:
    """padmotion 시스템 전체 설정"""
    fusion: FusionConfig = field(default_factory=FusionConfig)
    bias: BiasConfig = field(default_factory=BiasConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    replay: ReplayConfig = field(default_factory=ReplayConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        config_dict = asdict(self)
        config_dict['fusion']['initial_gravity'] = list(self.fusion.initial_gravity)
        return config_dict

    def save(self, filepath: str):
        """설정을 YAML 파일로 저장"""
        with open(filepath, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False)

        logger.info(f"Config saved to {filepath}")

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> 'SystemConfig':
        """
        딕셔너리에서 설정 생성

        빈 YAML 문서(None)나 누락된 섹션은 기본값을 사용합니다.
        알 수 없는 섹션은 ValueError 를 발생시킵니다.
        """
        d = d or {}
        sections = {
            'fusion': FusionConfig,
            'bias': BiasConfig,
            'smoothing': SmoothingConfig,
            'replay': ReplayConfig,
            'output': OutputConfig,
        }

        unknown = set(d) - set(sections)
        if unknown:
            raise ValueError(f"Unknown config sections: {sorted(unknown)}")

        return cls(**{name: section(**(d.get(name) or {})) for name, section in sections.items()})


def load_config(filepath: str) -> SystemConfig:
    """
    YAML 설정 로드 (파일이 없으면 경고 후 기본값)

    Args:
        filepath: 설정 파일 경로
    """
    path = Path(filepath)
    if not path.exists():
        logger.warning(f"Config file not found: {filepath}, using defaults")
        return SystemConfig()

    with open(path, 'r') as f:
        config = SystemConfig.from_dict(yaml.safe_load(f))

    logger.debug(f"Config loaded from {filepath}")
    return config


def create_default_config(save_path: Optional[str] = None) -> SystemConfig:
    """기본 설정 생성 (save_path 가 주어지면 YAML 로 저장)"""
    config = SystemConfig()
    if save_path:
        config.save(save_path)
    return config
