"""Centralized failure policy and error kinds for the conversion pipeline.

Every pipeline error derives from PairDBError and declares how the pipeline
reacts to it. Only image build failures are recovered; everything else
stops the run.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """Reaction of the pipeline to an error kind.

    FAIL_FAST: Abort the run, nothing more is written
    SKIP_RECORD: Log a warning and skip the record for the affected store
    """
    FAIL_FAST = "fail_fast"
    SKIP_RECORD = "skip_record"


class PairDBError(RuntimeError):
    """Base class for all pipeline errors."""
    policy = FailurePolicy.FAIL_FAST


class ContractViolation(PairDBError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad user input. It means a
    stage did not produce the invariants it promised (for example a key
    repeated within one pass).
    """
    pass


class ParseError(PairDBError, ValueError):
    """A manifest line does not decompose into ``path_a path_b scalar``."""

    def __init__(self, line_no: int, line: str, reason: str):
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_no}: syntax error, {reason}: {line!r}")


class ManifestNotFoundError(PairDBError):
    """The manifest path does not exist."""
    pass


class KeyOverflowError(PairDBError, ValueError):
    """An index does not fit in the zero-padded key width."""
    pass


class ImageBuildError(PairDBError):
    """An image pair could not be loaded, decoded or encoded."""
    policy = FailurePolicy.SKIP_RECORD

    def __init__(self, key: str, reason: str = "image pair could not be built"):
        self.key = key
        super().__init__(f"{reason}: {key}")


class SizeMismatchError(PairDBError):
    """An image payload differs in size from the first payload of the run."""

    def __init__(self, key: str, actual: int, expected: int):
        self.key = key
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"Incorrect data field size {actual} for {key} (expected {expected})"
        )


class StoreOpenError(PairDBError):
    """A store could not be opened (e.g. create-new target already exists)."""
    pass


class CommitError(PairDBError):
    """A store transaction failed to commit."""
    pass
