from __future__ import annotations


class PipeStreamError(Exception):
    # Base class for errors raised by the pipeline itself (collaborator errors propagate as-is).
    pass


class IncompleteRecordError(PipeStreamError, ValueError):
    # Data-integrity error: the source ended while an unterminated record was still buffered.
    def __init__(self, residual: int) -> None:
        super().__init__(f"Incomplete record: {residual} trailing byte(s) without a terminator")
        self.residual = residual
