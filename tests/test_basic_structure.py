"""Basic tests to verify project structure."""

import pytest


def test_package_imports():
    """Test that basic package imports work."""
    from nhmmer_extract import __version__, ExtractConfig, HitRecord, run_pipeline

    assert __version__ == "0.2.0"
    assert ExtractConfig is not None
    assert HitRecord is not None
    assert run_pipeline is not None


def test_exceptions():
    """Test that custom exceptions work."""
    from nhmmer_extract.exceptions import (
        ExtractError, MalformedRecord, MissingMetadata, ExternalToolFailure,
        SequenceParseFailure, IoFailure
    )

    for exc_type in (MalformedRecord, MissingMetadata, ExternalToolFailure, SequenceParseFailure, IoFailure):
        assert issubclass(exc_type, ExtractError)

    with pytest.raises(MalformedRecord) as exc_info:
        raise MalformedRecord("Bad row", line_number=4, line_content="chr1 -")
    assert str(exc_info.value).startswith("Line 4: Bad row")

    error = ExternalToolFailure("exited", command="esl-sfetch --index x.fa", return_code=2)
    assert "esl-sfetch --index x.fa" in str(error)
    assert "(exit code: 2)" in str(error)


def test_models():
    """Test basic model functionality."""
    from nhmmer_extract.models import HitRecord, OutputRecord, Strand

    hit = HitRecord(target_name="chr1", e_value=1e-7, ali_from=500, ali_to=100, strand=Strand.MINUS)
    assert hit.is_reverse

    # Test serialization
    hit_dict = hit.to_dict()
    assert hit_dict['strand'] == "-"
    assert HitRecord.from_dict(hit_dict) == hit

    seq_record = OutputRecord("Sp001:E1e-7:chr1", "desc", b"ACGT").to_seq_record()
    assert seq_record.id == "Sp001:E1e-7:chr1"
    assert str(seq_record.seq) == "ACGT"
