"""Exception hierarchy for the OCD production extractor.

Every error is terminal for a run: nothing is retried or recovered locally.
The CLI reports the message and exits non-zero.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Error codes, one per failure kind."""
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    ARCHIVE_OPEN_FAILURE = "ARCHIVE_OPEN_FAILURE"
    ARCHIVE_CONTENT_COUNT_VIOLATION = "ARCHIVE_CONTENT_COUNT_VIOLATION"
    DECODE_FAILURE = "DECODE_FAILURE"
    TOKENIZE_FAILURE = "TOKENIZE_FAILURE"
    MALFORMED_NUMERIC_FIELD = "MALFORMED_NUMERIC_FIELD"
    INVALID_PHASE_CODE = "INVALID_PHASE_CODE"
    WRITE_FAILURE = "WRITE_FAILURE"
    PARSER_FINISHED = "PARSER_FINISHED"


class ExtractionError(Exception):
    """Base exception for all extractor errors."""

    error_code: Optional[ErrorCode] = None

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


class MissingArgument(ExtractionError):
    """No archive path was given on the command line."""

    error_code = ErrorCode.MISSING_ARGUMENT

    def __init__(self, argument: str = "ARCHIVE"):
        self.argument = argument
        super().__init__(f"Missing required argument: {argument}")


class ArchiveOpenFailure(ExtractionError):
    """The archive could not be opened or is not a valid ZIP file."""

    error_code = ErrorCode.ARCHIVE_OPEN_FAILURE

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot open archive {path}: {reason}")


class ArchiveContentCountViolation(ExtractionError):
    """The archive does not contain exactly one document."""

    error_code = ErrorCode.ARCHIVE_CONTENT_COUNT_VIOLATION

    def __init__(self, path: str, count: int):
        self.path = path
        self.count = count
        super().__init__(f"Expected exactly one document in archive {path}, found {count}")


class DecodeFailure(ExtractionError):
    """The contained document could not be read or decoded."""

    error_code = ErrorCode.DECODE_FAILURE


class TokenizeFailure(ExtractionError):
    """The decoded document is not well-formed XML."""

    error_code = ErrorCode.TOKENIZE_FAILURE


class ParseError(ExtractionError):
    """Base class for errors raised by the production state machine."""


class MalformedNumericField(ParseError):
    """A numeric field's text is not a number of the expected type."""

    error_code = ErrorCode.MALFORMED_NUMERIC_FIELD

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Malformed numeric value in <{field}>: {value!r}")


class InvalidPhaseCode(ParseError):
    """A phase code's leading character is not O, G or W."""

    error_code = ErrorCode.INVALID_PHASE_CODE

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid phase code: {value!r} (expected O, G or W)")


class ParserFinishedError(ExtractionError):
    """The parser was used after finish() handed off its aggregate."""

    error_code = ErrorCode.PARSER_FINISHED

    def __init__(self):
        super().__init__("Parser already finished; create a new parser for another run")


class WriteFailure(ExtractionError):
    """The production table could not be written."""

    error_code = ErrorCode.WRITE_FAILURE
