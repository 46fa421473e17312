"""Core processing modules for nhmmer hit extraction."""

from .tblout import TbloutReader
from .hits import keep_hit, filter_hits, build_range_query
from .sfetch import SequenceIndexStore, EslSfetchStore
from .headers import format_e_value, rewrite_name, HeaderRewriter
from .fasta import parse_extracted, FastaEmitter
from .materialize import materialize_fasta

__all__ = [
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
    "materialize_fasta"
]
