"""nhmmer hit extraction.

Pulls the sequences of significant hits out of the FASTA an nhmmer search
was run against, using its --tblout report and esl-sfetch, and renames each
record so it can be traced back to its hit.
"""

__version__ = "0.2.0"

from .config import ExtractConfig, SoftwarePaths
from .models import ReportMetadata, HitRecord, RangeQuery, ExtractedSequence, OutputRecord, Strand
from .core import (
    TbloutReader,
    keep_hit, filter_hits, build_range_query,
    SequenceIndexStore, EslSfetchStore,
    format_e_value, rewrite_name, HeaderRewriter,
    parse_extracted, FastaEmitter,
    materialize_fasta
)
from .main import run_pipeline, extract_hits

__all__ = [
    "__version__",
    "ExtractConfig",
    "SoftwarePaths",
    "ReportMetadata",
    "HitRecord",
    "RangeQuery",
    "ExtractedSequence",
    "OutputRecord",
    "Strand",
    "TbloutReader",
    "keep_hit",
    "filter_hits",
    "build_range_query",
    "SequenceIndexStore",
    "EslSfetchStore",
    "format_e_value",
    "rewrite_name",
    "HeaderRewriter",
    "parse_extracted",
    "FastaEmitter",
    "materialize_fasta",
    "run_pipeline",
    "extract_hits"
]
