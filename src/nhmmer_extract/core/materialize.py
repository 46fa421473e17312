"""Local copy of the target FASTA, ready for indexing."""

from __future__ import annotations

import gzip
import zlib
from pathlib import Path

from loguru import logger

from ..exceptions import IoFailure


def is_gzipped(path: Path) -> bool:
    return Path(path).suffix == ".gz"


def materialize_fasta(source: Path, workdir: Path) -> Path:
    """
    Copy (or gunzip) ``source`` into ``workdir`` with LF line endings.

    esl-sfetch cannot index compressed files and writes its index next to the
    FASTA, so the file always gets a private copy.

    Args:
        source: FASTA file, optionally gzip compressed
        workdir: Scratch directory

    Returns:
        Path of the local copy

    Raises:
        IoFailure: If the source cannot be read or the copy written
    """
    source = Path(source)
    if not source.is_file():
        raise IoFailure("FASTA file not found", operation="Materialize FASTA", path=str(source))

    if is_gzipped(source):
        logger.info("Input fasta is gzipped, unzipping...")
        destination = Path(workdir) / source.stem
        opener = gzip.open
    else:
        logger.info("Input fasta is not gzipped, copying...")
        destination = Path(workdir) / source.name
        opener = open

    try:
        with opener(source, 'rb') as src, open(destination, 'wb') as dst:
            for line in src:
                dst.write(line.replace(b"\r\n", b"\n").replace(b"\r", b"\n"))
    except (OSError, EOFError, zlib.error) as e:
        raise IoFailure(str(e), operation="Materialize FASTA", path=str(source)) from e

    logger.info(f"New fasta location: {destination}")
    return destination
