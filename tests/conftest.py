#!/usr/bin/env python3
"""
Shared fixtures for nhmmer-extract tests.
"""

import pytest
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from nhmmer_extract.core.sfetch import SequenceIndexStore


TBLOUT_HEADER = """\
# target name        accession  query name           accession  hmmfrom hmm to alifrom  ali to envfrom  env to  sq len strand   E-value  score  bias  description of target
#------------------- ---------- -------------------- ---------- ------- ------- ------- ------- ------- ------- ------- ------ --------- ------ ----- ---------------------
"""

TBLOUT_FOOTER = """\
#
# Program:         nhmmer
# Version:         3.3.2 (Nov 2020)
# Pipeline mode:   SEARCH
# Query file:      query.hmm
# Target file:     {target_file}
# Option settings: nhmmer --tblout hits.tbl query.hmm {target_file}
# Current dir:     /home/user
# Date:            Mon Oct 19 10:00:00 2026
# [ok]
"""


def tblout_row(
    target_name: str,
    e_value: str,
    ali_from: int,
    ali_to: int,
    strand: Optional[str] = None,
    description: str = "-"
) -> str:
    """Format one data row in nhmmer --tblout layout."""
    if strand is None:
        strand = "+" if ali_from <= ali_to else "-"
    env_from, env_to = ali_from - 2, ali_to + 2
    if strand == "-":
        env_from, env_to = ali_from + 2, ali_to - 2
    return (
        f"{target_name:<20} -          MER1                 DF0000001        1     120 "
        f"{ali_from:>7} {ali_to:>7} {env_from:>7} {env_to:>7}   10000 {strand:>6} "
        f"{e_value:>9}   30.1   0.2  {description}\n"
    )


def write_tblout(path: Path, rows: List[str], target_file: Optional[str] = "/data/genome.fa") -> Path:
    """Write a report with the usual header and metadata block."""
    content = TBLOUT_HEADER + "".join(rows)
    if target_file is not None:
        content += TBLOUT_FOOTER.format(target_file=target_file)
    path.write_text(content)
    return path


class FakeStore(SequenceIndexStore):
    """In-memory store recording every call."""

    def __init__(self, responses: Optional[Dict[Tuple[str, str], bytes]] = None):
        self.responses = responses or {}
        self.built: List[Path] = []
        self.calls: List[Tuple[str, str]] = []

    def build(self, fasta_file: Path) -> None:
        self.built.append(Path(fasta_file))

    def fetch_range(self, target_name: str, coordinates: str) -> bytes:
        self.calls.append((target_name, coordinates))
        if (target_name, coordinates) in self.responses:
            return self.responses[(target_name, coordinates)]
        start, end = coordinates.split("..")
        return f">{target_name}/{start}-{end}\nACGTACGTAC\n".encode()


@pytest.fixture
def fasta_file(tmp_path):
    """Small target FASTA."""
    path = tmp_path / "genome.fa"
    path.write_text(">chr1\nACGTACGTACGTACGT\n>chr2\nTTTTGGGGCCCCAAAA\n")
    return path


@pytest.fixture
def three_hit_tblout(tmp_path, fasta_file):
    """Report with hits at E-values 1e-3, 1e-6 and 1e-9."""
    return write_tblout(
        tmp_path / "hits.tbl",
        [
            tblout_row("chr1", "1e-03", 100, 220),
            tblout_row("chr2", "1e-06", 500, 100),
            tblout_row("chr1", "1e-09", 1000, 1200),
        ],
        target_file=str(fasta_file)
    )


@pytest.fixture
def fake_store():
    return FakeStore()
