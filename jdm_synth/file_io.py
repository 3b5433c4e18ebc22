r"""
This module reads and writes the two flat text formats used by the command line tools:

- JDM files, one ``k,l,value`` record per line;
- edge-list files, one ``u,v`` record per line (undirected, the order of u and v is not significant).

Neither format has a header. Blank lines are skipped silently and unparsable lines are skipped with a warning,
unless ``strict=True`` is passed. Writers go through a temporary file that replaces the destination only once
every line is written, so an interrupted run never leaves a partial file behind.
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple, Union

import numpy as np

from .exceptions import FileAccessError, InputFormatError
from .jdm import JointDegreeMatrix

log = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Every field must fit the int64 arrays built from the records
MAX_FIELD_VALUE = int(np.iinfo(np.int64).max)


def _open_for_reading(path: PathLike) -> TextIO:
    try:
        return open(path, "r", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise FileAccessError(f"Cannot open file {path}: {exc.strerror or exc}") from exc


def _parse_record(line: str, n_fields: int, line_number: int) -> List[int]:
    fields = line.split(",")
    if len(fields) != n_fields:
        raise InputFormatError(
            f"line {line_number}: expected {n_fields} comma-separated fields, got {len(fields)}: {line!r}",
            line_number, line,
        )
    try:
        values = [int(field.strip()) for field in fields]
    except ValueError:
        raise InputFormatError(f"line {line_number}: non-integer field in {line!r}", line_number, line) from None
    if any(value < 0 for value in values):
        raise InputFormatError(f"line {line_number}: negative value in {line!r}", line_number, line)
    if any(value > MAX_FIELD_VALUE for value in values):
        raise InputFormatError(f"line {line_number}: value out of range in {line!r}", line_number, line)
    return values


def _iter_records(path: PathLike, n_fields: int, strict: bool) -> Iterator[List[int]]:
    with _open_for_reading(path) as fh:
        for line_number, raw in enumerate(fh, start=1):
            line = raw.strip()
            if not line:
                continue
            try:
                yield _parse_record(line, n_fields, line_number)
            except InputFormatError as exc:
                if strict:
                    raise
                log.warning("Skipping line of %s: %s", path, exc)


def read_jdm_entries(path: PathLike, strict: bool = False) -> List[Tuple[Tuple[int, int], int]]:
    """
    Reads a JDM file keeping every record in file order.

    Args:
        path: JDM file with ``k,l,value`` lines.
        strict: If True, an unparsable line raises InputFormatError instead of being skipped.

    Returns:
        List of ((k, l), value) records, duplicates included.

    Raises:
        FileAccessError: If the file cannot be opened.
    """
    return [((k, l), value) for k, l, value in _iter_records(path, 3, strict)]


def read_jdm(path: PathLike, strict: bool = False) -> JointDegreeMatrix:
    """Reads a JDM file into a dictionary. A repeated (k, l) record keeps the last value."""
    jdm: Dict[Tuple[int, int], int] = {}
    for key, value in read_jdm_entries(path, strict):
        jdm[key] = value
    log.info("Loaded %d JDM cells from %s", len(jdm), path)
    return jdm


def read_edge_list(path: PathLike, strict: bool = False) -> List[Tuple[int, int]]:
    """
    Reads an edge-list file.

    Each undirected edge is returned once as (u, v) with u < v, in order of first appearance.
    Duplicate records are dropped and self-loops are skipped with a warning.

    Raises:
        FileAccessError: If the file cannot be opened.
    """
    seen = set()
    edges = []
    for u, v in _iter_records(path, 2, strict):
        if u == v:
            log.warning("Skipping self-loop (%d, %d) in %s", u, v, path)
            continue
        edge = (u, v) if u < v else (v, u)
        if edge in seen:
            continue
        seen.add(edge)
        edges.append(edge)
    return edges


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


@contextmanager
def atomic_writer(path: PathLike) -> Iterator[TextIO]:
    """
    Opens a temporary file next to path and moves it over path once the block completes.

    The temporary file is removed when the block raises, leaving any previous file at path untouched.
    The moved file gets the usual permissions for a new file (0666 minus the umask).

    Raises:
        FileAccessError: If the temporary file cannot be created or moved into place.
    """
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", dir=directory)
    except OSError as exc:
        raise FileAccessError(f"Cannot open file {path} for writing: {exc.strerror or exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            yield fh
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    except OSError as exc:
        os.unlink(tmp_path)
        raise FileAccessError(f"Cannot write file {path}: {exc.strerror or exc}") from exc
    except BaseException:
        os.unlink(tmp_path)
        raise


def write_jdm(path: PathLike, jdm: JointDegreeMatrix, order: Optional[Sequence[Tuple[int, int]]] = None) -> None:
    """
    Writes a JDM file.

    Args:
        path: Destination file.
        jdm: Joint degree matrix.
        order: Keys to write first, in this order (e.g. the line order of the input file).
               Keys of jdm not listed are appended in sorted order. Listed keys missing from jdm are written as 0.
    """
    order = list(order) if order is not None else []
    listed = set(order)
    extra = sorted(key for key in jdm if key not in listed)

    with atomic_writer(path) as fh:
        for k, l in list(order) + extra:
            fh.write(f"{k},{l},{jdm.get((k, l), 0)}\n")


def write_edge_list(path: PathLike, edges: Iterable[Tuple[int, int]]) -> int:
    """Writes one ``u,v`` line per edge. Returns the number of edges written."""
    count = 0
    with atomic_writer(path) as fh:
        for u, v in edges:
            fh.write(f"{u},{v}\n")
            count += 1
    return count
