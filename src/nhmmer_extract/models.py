"""Data models for nhmmer hit extraction."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord


class Strand(Enum):
    """DNA strand orientation as reported by nhmmer."""
    PLUS = "+"
    MINUS = "-"


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata from the trailing comment block of a tblout report."""

    target_file: Optional[Path] = None
    program: Optional[str] = None
    version: Optional[str] = None
    query_file: Optional[Path] = None
    option_settings: Optional[str] = None

    @property
    def has_target_file(self) -> bool:
        return self.target_file is not None


@dataclass(frozen=True)
class HitRecord:
    """One row of an nhmmer --tblout report."""

    target_name: str
    e_value: float
    ali_from: int  # 1-based, may exceed ali_to on the minus strand
    ali_to: int
    target_accession: Optional[str] = None
    query_name: str = ""
    query_accession: Optional[str] = None
    hmm_from: int = 0
    hmm_to: int = 0
    env_from: int = 0
    env_to: int = 0
    sq_len: int = 0
    strand: Strand = Strand.PLUS
    score: float = 0.0
    bias: float = 0.0
    description: str = ""
    line_number: int = 0

    @property
    def is_reverse(self) -> bool:
        """Whether the alignment runs backwards on the target."""
        return self.ali_from > self.ali_to

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['strand'] = self.strand.value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "HitRecord":
        """Create from dictionary."""
        data = dict(data)
        if isinstance(data.get('strand'), str):
            data['strand'] = Strand(data['strand'])
        return cls(**data)


@dataclass(frozen=True)
class RangeQuery:
    """Coordinate query issued against an indexed FASTA."""

    target_name: str
    coordinates: str  # "from..to"


@dataclass
class ExtractedSequence:
    """A single FASTA record returned by the extraction tool."""

    name: str
    description: Optional[str]
    sequence: bytes


@dataclass
class OutputRecord:
    """A renamed record ready for serialization."""

    name: str
    description: Optional[str]
    sequence: bytes

    def to_seq_record(self) -> SeqRecord:
        """Convert to a Biopython SeqRecord."""
        return SeqRecord(
            Seq(self.sequence.decode("ascii")),
            id=self.name,
            name=self.name,
            description=self.description or "",
        )
