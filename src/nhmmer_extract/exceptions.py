"""Custom exceptions for nhmmer hit extraction."""


class ExtractError(Exception):
    """Base exception for all extraction errors."""
    pass


class MalformedRecord(ExtractError):
    """Exception raised when a tblout row is missing or has unparseable fields."""

    def __init__(self, message: str, line_number: int = None, line_content: str = None):
        self.line_number = line_number
        self.line_content = line_content

        if line_number is not None:
            message = f"Line {line_number}: {message}"
        if line_content is not None:
            message = f"{message} (content: {line_content[:50]}...)"

        super().__init__(message)


class MissingMetadata(ExtractError):
    """Exception raised when the report lacks a required header comment."""

    def __init__(self, message: str, report_file: str = None):
        self.report_file = report_file

        if report_file is not None:
            message = f"{message} (report: {report_file})"

        super().__init__(message)


class ExternalToolFailure(ExtractError):
    """Exception raised when esl-sfetch cannot be spawned or exits non-zero."""

    def __init__(self, message: str, command: str = None, return_code: int = None, stderr: str = None):
        self.command = command
        self.return_code = return_code
        self.stderr = stderr

        if command is not None:
            message = f"Command failed: {command}\n{message}"
        if return_code is not None:
            message = f"{message} (exit code: {return_code})"
        if stderr:
            message = f"{message}\n{stderr.strip()}"

        super().__init__(message)


class SequenceParseFailure(ExtractError):
    """Exception raised when extracted bytes are not valid FASTA."""

    def __init__(self, message: str, target_name: str = None):
        self.target_name = target_name

        if target_name is not None:
            message = f"Invalid FASTA extracted for {target_name}: {message}"

        super().__init__(message)


class IoFailure(ExtractError):
    """Exception raised for file or stream read/write errors."""

    def __init__(self, message: str, operation: str = None, path: str = None):
        self.operation = operation
        self.path = path

        if operation is not None:
            message = f"{operation} failed: {message}"
        if path is not None:
            message = f"{message} (path: {path})"

        super().__init__(message)


class ConfigurationError(ExtractError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_file: str = None, parameter: str = None):
        self.config_file = config_file
        self.parameter = parameter

        if config_file is not None:
            message = f"Configuration error in {config_file}: {message}"
        if parameter is not None:
            message = f"{message} (parameter: {parameter})"

        super().__init__(message)
