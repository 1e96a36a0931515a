"""Pipeline modules.

- writer: Batched transactional writer
- validator: Uniform image size check
- orchestrator: Conversion pipeline controller
- verify: Label/image store alignment check
"""

from pairdb.pipeline.writer import BatchedTransactionWriter
from pairdb.pipeline.validator import SizeConsistencyValidator
from pairdb.pipeline.orchestrator import ConversionPipeline, ConversionSummary, setup_logging
from pairdb.pipeline.verify import AlignmentReport, verify_alignment

__all__ = [
    "BatchedTransactionWriter",
    "SizeConsistencyValidator",
    "ConversionPipeline",
    "ConversionSummary",
    "setup_logging",
    "AlignmentReport",
    "verify_alignment",
]
