"""FASTA parsing of extracted sequences and output serialization."""

from __future__ import annotations

from io import StringIO
from typing import List, Optional, TextIO

from Bio import SeqIO
from Bio.SeqIO.FastaIO import FastaWriter
from loguru import logger

from ..exceptions import IoFailure, SequenceParseFailure
from ..models import ExtractedSequence, OutputRecord


def parse_extracted(raw: bytes, target_name: Optional[str] = None) -> List[ExtractedSequence]:
    """Parse esl-sfetch output into records.

    Empty output means nothing was extracted and gives an empty list.
    """
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise SequenceParseFailure(f"non-ASCII output: {e}", target_name=target_name) from e

    if not text.strip():
        return []
    if not text.lstrip().startswith(">"):
        raise SequenceParseFailure("output does not start with a '>' header line", target_name=target_name)

    records = []
    try:
        for record in SeqIO.parse(StringIO(text), "fasta"):
            # SeqIO keeps the whole title line, id included, in .description
            parts = record.description.split(None, 1)
            records.append(ExtractedSequence(
                name=record.id,
                description=parts[1] if len(parts) > 1 else None,
                sequence=str(record.seq).encode("ascii"),
            ))
    except ValueError as e:
        raise SequenceParseFailure(str(e), target_name=target_name) from e

    return records


def _title(record) -> str:
    if record.description:
        return f"{record.id} {record.description}"
    return record.id


class FastaEmitter:
    """Writes output records as wrapped FASTA, one flush per record."""

    def __init__(self, handle: TextIO, wrap: int = 80):
        """
        Initialize emitter.

        Args:
            handle: Open text stream to write to
            wrap: Sequence line width
        """
        self.handle = handle
        self.wrap = wrap
        self.written = 0
        self._writer = FastaWriter(handle, wrap=wrap, record2title=_title)

    def emit(self, record: OutputRecord) -> None:
        """Serialize and flush a single record."""
        try:
            self._writer.write_record(record.to_seq_record())
            self.handle.flush()
        except OSError as e:
            raise IoFailure(str(e), operation=f"Write record {record.name}") from e
        self.written += 1
        logger.debug(f"Wrote {record.name} ({len(record.sequence)} bp)")
