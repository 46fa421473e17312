"""nhmmer --tblout report reader."""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from loguru import logger

from ..exceptions import IoFailure, MalformedRecord, MissingMetadata
from ..models import HitRecord, ReportMetadata, Strand


class TbloutReader:
    """Reader for nhmmer tabular (--tblout) hit reports.

    Hits are parsed lazily, one line at a time. The metadata block that nhmmer
    writes as ``# Key: value`` comment lines is read separately by :meth:`meta`.
    """

    MIN_COLUMNS = 15

    # Column indices of the nhmmer --tblout layout
    TARGET_NAME = 0
    TARGET_ACCESSION = 1
    QUERY_NAME = 2
    QUERY_ACCESSION = 3
    HMM_FROM = 4
    HMM_TO = 5
    ALI_FROM = 6
    ALI_TO = 7
    ENV_FROM = 8
    ENV_TO = 9
    SQ_LEN = 10
    STRAND = 11
    E_VALUE = 12
    SCORE = 13
    BIAS = 14
    DESCRIPTION = 15

    META_PATTERN = re.compile(r'^#\s*([A-Za-z][A-Za-z ]*?):\s+(.*?)\s*$')

    def __init__(self, tblout_file: Path):
        """Initialize reader with report path."""
        self.tblout_file = Path(tblout_file)
        self._meta: Optional[ReportMetadata] = None

        if not self.tblout_file.is_file():
            raise IoFailure("tblout file not found", operation="Open report", path=str(self.tblout_file))

    def meta(self) -> ReportMetadata:
        """Read report-level metadata from the comment lines."""
        if self._meta is not None:
            return self._meta

        values: Dict[str, str] = {}
        try:
            with open(self.tblout_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.startswith('#'):
                        continue
                    match = self.META_PATTERN.match(line)
                    if match:
                        values.setdefault(match.group(1).lower(), match.group(2))
        except (OSError, UnicodeDecodeError) as e:
            raise IoFailure(str(e), operation="Read report metadata", path=str(self.tblout_file)) from e

        target_file = values.get("target file")
        query_file = values.get("query file")
        self._meta = ReportMetadata(
            target_file=Path(target_file) if target_file else None,
            program=values.get("program"),
            version=values.get("version"),
            query_file=Path(query_file) if query_file else None,
            option_settings=values.get("option settings"),
        )

        if self._meta.has_target_file:
            logger.debug(f"Report target file: {self._meta.target_file}")
        else:
            logger.debug(f"No '# Target file:' line in {self.tblout_file}")
        return self._meta

    def require_target_file(self, explicit: Optional[Path] = None) -> Path:
        """Return ``explicit`` if given, otherwise the target file named in the report."""
        if explicit is not None:
            return Path(explicit)

        meta = self.meta()
        if not meta.has_target_file:
            raise MissingMetadata(
                "No FASTA file given and the report has no '# Target file:' line",
                report_file=str(self.tblout_file)
            )
        return meta.target_file

    def records(self) -> Iterator[HitRecord]:
        """Yield hit records in file order."""
        line_number = 0
        try:
            with open(self.tblout_file, 'r', encoding='utf-8') as f:
                for line in f:
                    line_number += 1
                    stripped = line.strip()

                    if not stripped or stripped.startswith('#'):
                        continue

                    yield self._parse_line(stripped, line_number)
        except (OSError, UnicodeDecodeError) as e:
            raise IoFailure(
                f"line {line_number}: {e}", operation="Read report", path=str(self.tblout_file)
            ) from e

    def __iter__(self) -> Iterator[HitRecord]:
        return self.records()

    def _parse_line(self, line: str, line_number: int) -> HitRecord:
        """Parse a single data line of the report."""
        fields = line.split()

        if len(fields) < self.MIN_COLUMNS:
            raise MalformedRecord(
                f"Expected at least {self.MIN_COLUMNS} columns, got {len(fields)}",
                line_number=line_number,
                line_content=line
            )

        e_value = self._parse_float(fields, self.E_VALUE, "E-value", line, line_number)
        if math.isnan(e_value) or e_value < 0:
            raise MalformedRecord(
                f"E-value must be non-negative, got {fields[self.E_VALUE]}",
                line_number=line_number,
                line_content=line
            )

        strand_field = fields[self.STRAND]
        try:
            strand = Strand(strand_field)
        except ValueError:
            raise MalformedRecord(
                f"Invalid strand: {strand_field}", line_number=line_number, line_content=line
            )

        return HitRecord(
            target_name=fields[self.TARGET_NAME],
            e_value=e_value,
            ali_from=self._parse_int(fields, self.ALI_FROM, "alifrom", line, line_number),
            ali_to=self._parse_int(fields, self.ALI_TO, "ali to", line, line_number),
            target_accession=self._optional(fields[self.TARGET_ACCESSION]),
            query_name=fields[self.QUERY_NAME],
            query_accession=self._optional(fields[self.QUERY_ACCESSION]),
            hmm_from=self._parse_int(fields, self.HMM_FROM, "hmmfrom", line, line_number),
            hmm_to=self._parse_int(fields, self.HMM_TO, "hmm to", line, line_number),
            env_from=self._parse_int(fields, self.ENV_FROM, "envfrom", line, line_number),
            env_to=self._parse_int(fields, self.ENV_TO, "env to", line, line_number),
            sq_len=self._parse_int(fields, self.SQ_LEN, "sq len", line, line_number),
            strand=strand,
            score=self._parse_float(fields, self.SCORE, "score", line, line_number),
            bias=self._parse_float(fields, self.BIAS, "bias", line, line_number),
            description=" ".join(fields[self.DESCRIPTION:]),
            line_number=line_number,
        )

    @staticmethod
    def _parse_int(fields: List[str], index: int, column: str, line: str, line_number: int) -> int:
        try:
            return int(fields[index])
        except ValueError:
            raise MalformedRecord(
                f"Column '{column}' is not an integer: {fields[index]}",
                line_number=line_number,
                line_content=line
            )

    @staticmethod
    def _parse_float(fields: List[str], index: int, column: str, line: str, line_number: int) -> float:
        try:
            return float(fields[index])
        except ValueError:
            raise MalformedRecord(
                f"Column '{column}' is not a number: {fields[index]}",
                line_number=line_number,
                line_content=line
            )

    @staticmethod
    def _optional(value: str) -> Optional[str]:
        """nhmmer writes '-' for empty accession columns."""
        return None if value == "-" else value
