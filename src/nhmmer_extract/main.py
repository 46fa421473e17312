#!/usr/bin/env python3
"""
Main pipeline module for nhmmer hit extraction.

This module provides the command line entry point and runs the per-hit
filter, fetch, rename and write loop.
"""

import argparse
import logging
import sys
import tempfile
from pathlib import Path
from typing import List, Optional, TextIO

from loguru import logger as core_logger

from . import __version__
from .config import DEFAULT_E_VALUE_THRESHOLD, ExtractConfig, SoftwarePaths
from .core.fasta import FastaEmitter, parse_extracted
from .core.headers import HeaderRewriter
from .core.hits import build_range_query, filter_hits
from .core.materialize import materialize_fasta
from .core.sfetch import EslSfetchStore, SequenceIndexStore
from .core.tblout import TbloutReader
from .exceptions import ExtractError, IoFailure


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging configuration; stdout is reserved for FASTA output."""
    level = log_level.upper()
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
        force=True
    )
    core_logger.remove()
    core_logger.add(sys.stderr, level=level)


def extract_hits(
    reader: TbloutReader,
    store: SequenceIndexStore,
    threshold: float,
    rewriter: HeaderRewriter,
    emitter: FastaEmitter
) -> int:
    """
    Extract, rename and write every hit passing ``threshold``.

    Hits are handled one at a time in report order; each is written before
    the next row is read.

    Args:
        reader: Report reader
        store: Indexed sequence store, already built
        threshold: Inclusive E-value cutoff
        rewriter: Header rewriter for this run
        emitter: Output writer

    Returns:
        Number of records written
    """
    logger = logging.getLogger(__name__)
    hits_kept = 0
    start = emitter.written

    for hit in filter_hits(reader.records(), threshold):
        hits_kept += 1
        query = build_range_query(hit)
        raw = store.fetch_range(query.target_name, query.coordinates)

        extracted = parse_extracted(raw, target_name=query.target_name)
        if not extracted:
            logger.warning(f"No sequence extracted for {query.target_name} {query.coordinates}")
            continue

        for sequence in extracted:
            emitter.emit(rewriter.rewrite(hit, sequence))

    written = emitter.written - start
    logger.info(f"Extracted {written} sequences from {hits_kept} hits with E-value <= {threshold}")
    return written


def run_pipeline(
    config: ExtractConfig,
    store: Optional[SequenceIndexStore] = None,
    output: Optional[TextIO] = None
) -> int:
    """
    Run the complete extraction.

    Args:
        config: Run configuration
        store: Sequence store; defaults to esl-sfetch
        output: Text stream for FASTA; defaults to ``config.output_file`` or stdout

    Returns:
        Number of records written
    """
    logger = logging.getLogger(__name__)

    logger.info("Running nhmmer-extract")
    logger.info(f"tblout file: {config.tblout_file}")

    reader = TbloutReader(config.tblout_file)
    fasta = reader.require_target_file(config.fasta_file)
    logger.info(f"FASTA file: {fasta}")

    if store is None:
        esl_sfetch = config.esl_sfetch or SoftwarePaths.auto_detect().esl_sfetch
        store = EslSfetchStore(esl_sfetch)

    rewriter = HeaderRewriter(config.species_id)

    with tempfile.TemporaryDirectory(prefix="nhmmer_extract_") as tmpdir:
        local_fasta = materialize_fasta(fasta, Path(tmpdir))
        store.build(local_fasta)

        logger.info("Iterating over tblout")
        if output is None and config.output_file is not None:
            try:
                handle = open(config.output_file, 'w')
            except OSError as e:
                raise IoFailure(str(e), operation="Open output", path=str(config.output_file)) from e
            with handle:
                emitter = FastaEmitter(handle, wrap=config.line_width)
                return extract_hits(reader, store, config.e_value_threshold, rewriter, emitter)

        emitter = FastaEmitter(output or sys.stdout, wrap=config.line_width)
        return extract_hits(reader, store, config.e_value_threshold, rewriter, emitter)


def build_parser() -> argparse.ArgumentParser:
    """Command line interface definition."""
    parser = argparse.ArgumentParser(
        prog="nhmmer-extract",
        description="Extract the sequences of significant nhmmer hits from a --tblout report"
    )

    parser.add_argument(
        "tbl",
        type=Path,
        nargs="?",
        help="Path to the nhmmer tblout file"
    )

    parser.add_argument(
        "fasta",
        type=Path,
        nargs="?",
        help="FASTA file the search was run against (default: the report's '# Target file:')"
    )

    parser.add_argument(
        "-e", "--esl-sfetch",
        type=Path,
        help="Path to esl-sfetch (default: $ESL_SFETCH or PATH lookup)"
    )

    parser.add_argument(
        "-v", "--e-value-threshold",
        type=float,
        default=None,
        help=f"E-value threshold for hits to extract (default: {DEFAULT_E_VALUE_THRESHOLD:g})"
    )

    parser.add_argument(
        "-s", "--species-id",
        default=None,
        help="Species ID to add to the start of each header"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Write FASTA here instead of stdout"
    )

    parser.add_argument(
        "--line-width",
        type=int,
        default=None,
        help="Sequence line width (default: 80)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with any of the options above"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or "INFO")

    try:
        if args.config is not None:
            config = ExtractConfig.from_yaml(args.config, ExtractConfig.args_to_fields(vars(args)))
        else:
            if args.tbl is None:
                parser.error("the following arguments are required: tbl")
            config = ExtractConfig.from_args(vars(args))

        setup_logging(config.log_level)
        run_pipeline(config)
    except ExtractError as e:
        logging.error(f"Extraction failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logging.info("Extraction interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
