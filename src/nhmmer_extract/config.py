"""Configuration management for nhmmer hit extraction."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigurationError


DEFAULT_E_VALUE_THRESHOLD = 1e-5
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ExtractConfig:
    """Extraction run settings."""

    tblout_file: Path
    fasta_file: Optional[Path] = None
    esl_sfetch: Optional[Path] = None
    e_value_threshold: float = DEFAULT_E_VALUE_THRESHOLD
    species_id: str = ""
    output_file: Optional[Path] = None
    line_width: int = 80
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.tblout_file = Path(self.tblout_file)
        if self.fasta_file is not None:
            self.fasta_file = Path(self.fasta_file)
        if self.esl_sfetch is not None:
            self.esl_sfetch = Path(self.esl_sfetch)
        if self.output_file is not None:
            self.output_file = Path(self.output_file)

        if not self.tblout_file.exists():
            raise ConfigurationError(f"tblout file not found: {self.tblout_file}")

        try:
            self.e_value_threshold = float(self.e_value_threshold)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid e-value threshold: {self.e_value_threshold}",
                parameter="e_value_threshold"
            )
        if math.isnan(self.e_value_threshold) or self.e_value_threshold < 0:
            raise ConfigurationError(
                f"Invalid e-value threshold: {self.e_value_threshold}",
                parameter="e_value_threshold"
            )

        if self.species_id is None:
            self.species_id = ""
        self.species_id = str(self.species_id)

        if self.line_width <= 0:
            raise ConfigurationError(f"Invalid line_width: {self.line_width}", parameter="line_width")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log_level: {self.log_level}", parameter="log_level")

    @classmethod
    def from_yaml(cls, yaml_file: Path, overrides: Optional[Dict[str, Any]] = None) -> "ExtractConfig":
        """Load configuration from YAML file, letting ``overrides`` win."""
        yaml_file = Path(yaml_file)
        if not yaml_file.exists():
            raise ConfigurationError(f"Config file not found: {yaml_file}")

        try:
            with open(yaml_file, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML config: {e}", config_file=str(yaml_file))

        if not isinstance(data, dict):
            raise ConfigurationError("Top level must be a mapping", config_file=str(yaml_file))

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown config parameters: {', '.join(unknown)}",
                config_file=str(yaml_file)
            )

        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid config parameters: {e}", config_file=str(yaml_file))

    @classmethod
    def from_args(cls, args: dict) -> "ExtractConfig":
        """Create configuration from command-line arguments."""
        config_args = cls.args_to_fields(args)
        if 'tblout_file' not in config_args:
            raise ConfigurationError("A tblout file is required", parameter="tblout_file")
        return cls(**config_args)

    @staticmethod
    def args_to_fields(args: dict) -> Dict[str, Any]:
        """Map command-line argument names to config field names."""
        arg_mapping = {
            'tbl': 'tblout_file',
            'fasta': 'fasta_file',
            'esl_sfetch': 'esl_sfetch',
            'e_value_threshold': 'e_value_threshold',
            'species_id': 'species_id',
            'output': 'output_file',
            'line_width': 'line_width',
            'log_level': 'log_level',
        }

        config_args = {}
        for arg_name, config_name in arg_mapping.items():
            if arg_name in args and args[arg_name] is not None:
                config_args[config_name] = args[arg_name]
        return config_args


@dataclass
class SoftwarePaths:
    """External software paths."""

    esl_sfetch: Path

    @classmethod
    def auto_detect(cls) -> "SoftwarePaths":
        """Find esl-sfetch, preferring $ESL_SFETCH over the system PATH."""
        from_env = os.environ.get("ESL_SFETCH")
        if from_env:
            esl_sfetch = Path(from_env)
            if not esl_sfetch.is_file():
                raise ConfigurationError(f"ESL_SFETCH points to a missing file: {esl_sfetch}")
            return cls(esl_sfetch=esl_sfetch)

        return cls(esl_sfetch=cls._find_in_path("esl-sfetch"))

    @staticmethod
    def _find_in_path(executable: str) -> Path:
        """Find executable in system PATH."""
        for path in os.environ.get("PATH", "").split(os.pathsep):
            if not path:
                continue
            exe_path = Path(path) / executable
            if exe_path.exists() and exe_path.is_file():
                return exe_path

        raise ConfigurationError(
            f"Could not find {executable} in PATH; it ships with HMMER (easel miniapps)"
        )
