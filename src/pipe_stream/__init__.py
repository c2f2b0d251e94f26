from .domain import CapacityState, IncompleteRecordError, PipeStreamError, ReadResult, SourceState, StopReason, WriteResult, fold_case
from .kernel import Pump, RunReport, SplitResult, TransformingStream, UnconsumedBuffer, copy_lines, split_lines

__version__ = "0.1.0"

__all__ = [
    "CapacityState",
    "IncompleteRecordError",
    "PipeStreamError",
    "Pump",
    "ReadResult",
    "RunReport",
    "SourceState",
    "SplitResult",
    "StopReason",
    "TransformingStream",
    "UnconsumedBuffer",
    "WriteResult",
    "copy_lines",
    "fold_case",
    "split_lines",
]
