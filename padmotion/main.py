"""
main.py - IMU 로그 재생 파이프라인

기록된 컨트롤러 IMU 로그를 MotionSession 으로 재생하여
틱별 방향/선형 가속도 결과를 저장합니다.

파이프라인:
1. ImuLogLoader 로 CSV 로그 로드
2. MotionSession (바이어스 보정 + 상보 필터) 으로 틱 처리
3. ResultExporter 로 CSV/JSON 저장 및 요약

Version: 1.0
Author: FurSys AI Team
"""

import argparse
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .config.system_config import SystemConfig, load_config
from .fusion.session import MotionSession
from .input.imu_loader import ImuLogLoader
from .output.result_exporter import ResultExporter

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ReplayPipeline:
    """
    IMU 로그 재생 파이프라인

    Example:
        >>> pipeline = ReplayPipeline(config)
        >>> summary = pipeline.run("imu_data.csv", output_dir="output")
    """

    def __init__(self, config: Optional[SystemConfig] = None, controller_id: str = 'replay'):
        self.config = config or SystemConfig()
        self.session = MotionSession(controller_id, self.config)

    def run(
        self,
        log_path: str,
        output_dir: Optional[str] = None,
        max_samples: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        로그 재생

        Args:
            log_path: IMU CSV 로그 경로
            output_dir: 출력 디렉토리 (None이면 설정값)
            max_samples: 최대 처리 틱 수

        Returns:
            요약 통계
        """
        replay = self.config.replay
        loader = ImuLogLoader(
            log_path,
            input_format=replay.input_format,
            gyro_in_radians=replay.gyro_in_radians,
            accel_scale=replay.accel_scale,
            time_scale=replay.time_scale
        )

        output = self.config.output
        exporter = ResultExporter(
            output_dir or output.output_dir,
            output_format=output.output_format
        )

        total = len(loader) if max_samples is None else min(max_samples, len(loader))
        logger.info(f"Replaying {total} samples from {log_path}")

        start = time.perf_counter()
        for i in range(total):
            sample = loader.load_sample(i)
            state = self.session.process(sample.accel, sample.gyro, timestamp=sample.timestamp)
            exporter.add_result(state)

            if i % 500 == 0 or i == total - 1:
                roll, pitch, yaw = state.euler
                logger.debug(
                    f"Sample {i}: euler=[{roll:.1f}, {pitch:.1f}, {yaw:.1f}], "
                    f"accel=[{state.filtered_accel.x:.3f}, {state.filtered_accel.y:.3f}, "
                    f"{state.filtered_accel.z:.3f}]"
                )
        elapsed = time.perf_counter() - start

        if total > 0:
            logger.info(f"Processed {total} samples in {elapsed * 1000:.1f} ms "
                        f"({elapsed / total * 1e6:.1f} us/sample)")

        if output.save_results:
            filepath = exporter.save()
            logger.info(f"Results saved to {filepath}")

        return exporter.get_summary()


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None):
    """루트 로거 설정"""
    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )


def main(argv=None):
    """메인 실행"""
    parser = argparse.ArgumentParser(
        description='padmotion: 컨트롤러 IMU 로그 재생 (상보 필터 방향 추정)'
    )
    parser.add_argument('--log', type=str, required=True,
                        help='IMU CSV 로그 경로')
    parser.add_argument('--config', type=str, default=None,
                        help='설정 파일 경로 (YAML)')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='출력 디렉토리 경로')
    parser.add_argument('--format', type=str, choices=['csv', 'json'], default=None,
                        help='출력 형식')
    parser.add_argument('--max-samples', type=int, default=None,
                        help='최대 처리 틱 수')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='상세 로그 출력')

    args = parser.parse_args(argv)

    # 설정 로드
    config = load_config(args.config) if args.config else SystemConfig()
    if args.format:
        config.output.output_format = args.format

    output_dir = args.output_dir or config.output.output_dir
    log_file = str(Path(output_dir) / 'padmotion.log') if config.output.log_to_file else None
    configure_logging('DEBUG' if args.verbose else config.output.log_level, log_file)

    pipeline = ReplayPipeline(config)
    summary = pipeline.run(args.log, output_dir=output_dir, max_samples=args.max_samples)

    logger.info(f"Summary: {summary}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
