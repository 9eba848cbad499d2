"""Exceptions raised by the extraction pipeline."""

from typing import Optional


class ExtractionError(Exception):
    """Base exception for extraction run failures.

    Example:
        try:
            task.execute()
        except ExtractionError as e:
            logger.error("extraction_failed", error=str(e))
    """

    pass


class ExpressionParseError(ExtractionError):
    """A template binding expression could not be parsed.

    Never escapes an extractor: the binding is skipped instead.

    Attributes:
        expression: The expression source.
    """

    def __init__(self, message: str, expression: str = ""):
        super().__init__(message)
        self.expression = expression


class OutputParseError(ExtractionError):
    """An existing output file could not be parsed before merging.

    Attributes:
        path: Path of the malformed file.
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to parse existing output file {path}: {cause}")
        self.path = path
        self.cause = cause


class OutputWriteError(ExtractionError):
    """An output file could not be written.

    Attributes:
        path: Path of the output file.
        cause: Underlying OS error.
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to write output file {path}: {cause}")
        self.path = path
        self.cause = cause


class UnexpectedKeyError(ExtractionError):
    """A new key would nest below an existing translated key.

    Attributes:
        key: The offending key.
    """

    def __init__(self, key: str):
        super().__init__(f"Unexpected key: {key}")
        self.key = key
