"""
output 모듈 - 결과 내보내기
"""

from .result_exporter import ResultExporter

__all__ = ['ResultExporter']
