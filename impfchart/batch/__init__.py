"""
Batch chart processing module.
"""

from .assembler import ChartAssembler
from .bucketing import RecordPool
from .pipeline import ChartPipeline
from .readers import ProbeBatchReader
from .writers import ChartWriter

__all__ = [
    "ChartAssembler",
    "ChartPipeline",
    "ChartWriter",
    "ProbeBatchReader",
    "RecordPool",
]
