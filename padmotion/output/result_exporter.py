"""
result_exporter.py - 처리 결과 내보내기

틱별 MotionState 를 누적하여 CSV 또는 JSON 으로 저장하고
요약 통계를 계산합니다.

Version: 1.0
Author: FurSys AI Team
"""

import json
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from ..config.system_config import OUTPUT_FORMATS
from ..fusion.orientation_tracker import MotionState

logger = logging.getLogger(__name__)


class ResultExporter:
    """
    MotionState 결과 내보내기

    Example:
        >>> exporter = ResultExporter("output", output_format="csv")
        >>> exporter.add_result(state)
        >>> filepath = exporter.save()
    """

    def __init__(self, output_dir: str, output_format: str = 'csv'):
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output_format: {output_format}")

        self.output_dir = Path(output_dir)
        self.output_format = output_format
        self._states: List[MotionState] = []

    def add_result(self, state: MotionState):
        """결과 추가"""
        self._states.append(state)

    def __len__(self) -> int:
        return len(self._states)

    def to_dataframe(self) -> pd.DataFrame:
        """결과를 DataFrame 으로 변환"""
        return pd.DataFrame([s.to_row() for s in self._states])

    def save(self, filename: Optional[str] = None) -> Path:
        """
        결과 저장

        Args:
            filename: 파일 이름 (None이면 motion_results.<format>)

        Returns:
            저장된 파일 경로
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        if filename is None:
            filename = f"motion_results.{self.output_format}"
        filepath = self.output_dir / filename

        if self.output_format == 'csv':
            self.to_dataframe().to_csv(filepath, index=False)
        else:
            payload = {
                'summary': self.get_summary(),
                'results': [s.to_dict() for s in self._states]
            }
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)

        logger.info(f"Saved {len(self._states)} results to {filepath}")
        return filepath

    def get_summary(self) -> Dict[str, Any]:
        """요약 통계"""
        if not self._states:
            return {'count': 0}

        df = self.to_dataframe()
        accel_mag = np.sqrt(df['accel_x'] ** 2 + df['accel_y'] ** 2 + df['accel_z'] ** 2)
        rot_norm = np.sqrt(df['rot_x'] ** 2 + df['rot_y'] ** 2 + df['rot_z'] ** 2 + df['rot_w'] ** 2)

        last = self._states[-1]
        roll, pitch, yaw = (float(a) for a in last.euler)

        return {
            'count': len(self._states),
            'duration': float(df['delta_time'].sum()),
            'linear_accel': {
                'mean': float(accel_mag.mean()),
                'max': float(accel_mag.max()),
                'std': float(accel_mag.std(ddof=0))
            },
            'final_euler': {'roll': roll, 'pitch': pitch, 'yaw': yaw},
            'rotation_norm_drift': float(np.abs(rot_norm - 1.0).max()),
            'gyro_bias': [last.gyro_bias.x, last.gyro_bias.y, last.gyro_bias.z],
            'accel_bias': [last.accel_bias.x, last.accel_bias.y, last.accel_bias.z]
        }
