from .case_fold import fold_case
from .errors import IncompleteRecordError, PipeStreamError
from .signals import CapacityState, ReadResult, SourceState, StopReason, WriteResult

# Public domain exports keep imports explicit across layers.
__all__ = [
    "CapacityState",
    "IncompleteRecordError",
    "PipeStreamError",
    "ReadResult",
    "SourceState",
    "StopReason",
    "WriteResult",
    "fold_case",
]
