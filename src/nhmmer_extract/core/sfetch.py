"""
Indexed sequence retrieval for nhmmer hit extraction.

This module wraps esl-sfetch (from HMMER's easel miniapps) behind a small
index/fetch interface so the extraction loop does not depend on the tool.
"""

import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..exceptions import ExternalToolFailure


class SequenceIndexStore(ABC):
    """Random access to subsequences of an indexed FASTA file."""

    @abstractmethod
    def build(self, fasta_file: Path) -> None:
        """Index ``fasta_file``; must be called once before :meth:`fetch_range`."""

    @abstractmethod
    def fetch_range(self, target_name: str, coordinates: str) -> bytes:
        """Return FASTA formatted bytes for ``coordinates`` (``from..to``) of ``target_name``."""


class EslSfetchStore(SequenceIndexStore):
    """esl-sfetch execution wrapper."""

    def __init__(self, executable: Path):
        """
        Initialize the store.

        Args:
            executable: Path to the esl-sfetch binary
        """
        self.executable = Path(executable)
        self.fasta_file: Optional[Path] = None

    def build(self, fasta_file: Path) -> None:
        """
        Build the SSI index next to the FASTA file.

        Args:
            fasta_file: FASTA file to index

        Raises:
            ExternalToolFailure: If esl-sfetch cannot be run or fails
        """
        fasta_file = Path(fasta_file)
        cmd = [str(self.executable), "--index", str(fasta_file)]
        logger.info(f"Indexing {fasta_file}")
        self._run(cmd)
        self.fasta_file = fasta_file

    def fetch_range(self, target_name: str, coordinates: str) -> bytes:
        """
        Extract a subsequence.

        Args:
            target_name: Sequence name in the indexed FASTA
            coordinates: ``from..to``, 1-based; ``from > to`` gives the reverse complement

        Returns:
            Raw esl-sfetch stdout, possibly empty

        Raises:
            ExternalToolFailure: If the store is not indexed or esl-sfetch fails
        """
        if self.fasta_file is None:
            raise ExternalToolFailure("fetch_range called before build(); no index available")

        cmd = [str(self.executable), "-c", coordinates, str(self.fasta_file), target_name]
        return self._run(cmd)

    def _run(self, cmd: List[str]) -> bytes:
        command = " ".join(cmd)
        logger.debug(f"Running: {command}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                check=True
            )
        except subprocess.CalledProcessError as e:
            raise ExternalToolFailure(
                "esl-sfetch exited with an error",
                command=command,
                return_code=e.returncode,
                stderr=e.stderr.decode(errors="replace") if e.stderr else None
            ) from e
        except OSError as e:
            raise ExternalToolFailure(f"Could not run esl-sfetch: {e}", command=command) from e
        return result.stdout
