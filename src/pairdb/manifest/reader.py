"""Read paired-image manifests into ordered records.

A manifest is plain text with one record per line and no header::

    left/0001.png right/0001.png 0.75
    left/0002.png right/0002.png 1.25

Lines are split on a single delimiter character, so two consecutive
delimiters produce an empty token and the line is rejected.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, TextIO, Tuple, Union

from pairdb.contracts import ParseError, ManifestNotFoundError

__all__ = ['Record', 'read_manifest', 'parse_line']

logger = logging.getLogger(__name__)

N_TOKENS = 3


@dataclass(frozen=True)
class Record:
    """One manifest line: two image paths and the scalar attached to the pair."""
    path_a: str
    path_b: str
    scalar: float
    line_no: int = -1


def parse_line(line: str, line_no: int, delimiter: str = " ") -> Record:
    """Parse a single stripped manifest line.

    Raises
    ------
    ParseError
        If the line does not have exactly 3 tokens or the scalar is not a finite float.
    """
    tokens = line.split(delimiter)
    if len(tokens) != N_TOKENS:
        raise ParseError(line_no, line, f"can't find {N_TOKENS} tokens (found {len(tokens)})")

    path_a, path_b, raw_scalar = tokens
    if not path_a or not path_b:
        raise ParseError(line_no, line, "empty path token")
    try:
        scalar = float(raw_scalar)
    except ValueError:
        raise ParseError(line_no, line, f"scalar {raw_scalar!r} is not a number") from None
    if not math.isfinite(scalar):
        raise ParseError(line_no, line, f"scalar {raw_scalar!r} is not finite")

    return Record(path_a=path_a, path_b=path_b, scalar=scalar, line_no=line_no)


def _parse_stream(stream: TextIO, delimiter: str) -> Tuple[List[Record], int]:
    records = []
    lines_read = 0
    for line_no, raw in enumerate(stream):
        lines_read += 1
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        records.append(parse_line(line, line_no, delimiter))
    return records, lines_read


def read_manifest(source: Union[str, Path, TextIO], delimiter: str = " ") -> Tuple[List[Record], int]:
    """Parse a manifest into records in file order.

    Parameters
    ----------
    source : str, Path or text stream
        Manifest location, or an already-open text stream.
    delimiter : str
        Single token separator character (default: space).

    Returns
    -------
    records : list of Record
        All records, in manifest order.
    lines_read : int
        Number of physical lines read, blank lines included.

    Raises
    ------
    ManifestNotFoundError
        If ``source`` is a path that does not exist.
    ParseError
        On the first malformed line. No records are returned in that case.
    """
    if hasattr(source, "read"):
        records, lines_read = _parse_stream(source, delimiter)
    else:
        path = Path(source)
        if not path.is_file():
            raise ManifestNotFoundError(f"Manifest not found: {path}")
        with open(path, "r", encoding="utf-8") as fh:
            records, lines_read = _parse_stream(fh, delimiter)
        logger.debug("Read manifest %s", path)

    logger.info("A total of %d image pairs (%d lines read).", len(records), lines_read)
    return records, lines_read
