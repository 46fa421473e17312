"""Tests for configuration loading."""

import pytest
from pathlib import Path

from nhmmer_extract.config import ExtractConfig, SoftwarePaths
from nhmmer_extract.exceptions import ConfigurationError


def test_defaults(three_hit_tblout):
    config = ExtractConfig(tblout_file=three_hit_tblout)

    assert config.e_value_threshold == 1e-5
    assert config.species_id == ""
    assert config.fasta_file is None
    assert config.line_width == 80
    assert config.log_level == "INFO"


def test_missing_tblout(tmp_path):
    with pytest.raises(ConfigurationError):
        ExtractConfig(tblout_file=tmp_path / "missing.tbl")


@pytest.mark.parametrize("threshold", [-1.0, float("nan"), "abc"])
def test_invalid_threshold(three_hit_tblout, threshold):
    with pytest.raises(ConfigurationError):
        ExtractConfig(tblout_file=three_hit_tblout, e_value_threshold=threshold)


def test_invalid_log_level(three_hit_tblout):
    with pytest.raises(ConfigurationError):
        ExtractConfig(tblout_file=three_hit_tblout, log_level="LOUD")


def test_from_args(three_hit_tblout):
    config = ExtractConfig.from_args({
        'tbl': three_hit_tblout,
        'fasta': None,
        'e_value_threshold': 1e-3,
        'species_id': "Sp001",
        'log_level': None,
    })

    assert config.tblout_file == three_hit_tblout
    assert config.fasta_file is None
    assert config.e_value_threshold == 1e-3
    assert config.species_id == "Sp001"


def test_from_args_requires_tblout():
    with pytest.raises(ConfigurationError):
        ExtractConfig.from_args({'tbl': None})


def test_from_yaml_with_overrides(tmp_path, three_hit_tblout):
    config_file = tmp_path / "extract.yaml"
    config_file.write_text(
        f"tblout_file: {three_hit_tblout}\n"
        "e_value_threshold: 1.0e-8\n"
        "species_id: Sp001\n"
    )

    config = ExtractConfig.from_yaml(config_file, {'species_id': "Sp002", 'fasta_file': None})

    assert config.tblout_file == three_hit_tblout
    assert config.e_value_threshold == 1e-8
    assert config.species_id == "Sp002"


def test_from_yaml_unknown_key(tmp_path, three_hit_tblout):
    config_file = tmp_path / "extract.yaml"
    config_file.write_text(f"tblout_file: {three_hit_tblout}\nthreads: 4\n")

    with pytest.raises(ConfigurationError):
        ExtractConfig.from_yaml(config_file)


def test_from_yaml_invalid(tmp_path):
    config_file = tmp_path / "extract.yaml"
    config_file.write_text("tblout_file: [unclosed\n")

    with pytest.raises(ConfigurationError):
        ExtractConfig.from_yaml(config_file)


def test_auto_detect_from_path(tmp_path, monkeypatch):
    exe = tmp_path / "esl-sfetch"
    exe.write_text("#!/bin/sh\n")
    monkeypatch.delenv("ESL_SFETCH", raising=False)
    monkeypatch.setenv("PATH", str(tmp_path))

    assert SoftwarePaths.auto_detect().esl_sfetch == exe


def test_auto_detect_from_env(tmp_path, monkeypatch):
    exe = tmp_path / "my-sfetch"
    exe.write_text("#!/bin/sh\n")
    monkeypatch.setenv("ESL_SFETCH", str(exe))

    assert SoftwarePaths.auto_detect().esl_sfetch == Path(exe)


def test_auto_detect_missing(tmp_path, monkeypatch):
    monkeypatch.delenv("ESL_SFETCH", raising=False)
    monkeypatch.setenv("PATH", str(tmp_path))

    with pytest.raises(ConfigurationError):
        SoftwarePaths.auto_detect()
