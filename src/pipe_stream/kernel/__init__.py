from .buffer import UnconsumedBuffer
from .line_reader import LineCopyReport, copy_lines
from .line_splitter import NEWLINE, SplitResult, split_lines
from .pump import Pump, RunReport
from .transforming_stream import TransformingStream

# Kernel exports are minimal and runtime-focused.
__all__ = [
    "NEWLINE",
    "LineCopyReport",
    "Pump",
    "RunReport",
    "SplitResult",
    "TransformingStream",
    "UnconsumedBuffer",
    "copy_lines",
    "split_lines",
]
