"""Exception hierarchy for Java source analysis."""


class AnalysisError(Exception):
    """Base exception for all analysis errors."""

    pass


class ParseError(AnalysisError):
    """The supplied text is not syntactically valid Java.

    Parse failure is fatal for the whole analysis call; no partial
    result is ever returned alongside it.
    """

    def __init__(self, message: str, line: int = -1):
        super().__init__(message)
        self.line = line


class AnalysisTimeoutError(AnalysisError):
    """Concurrent checks did not finish within the allotted time."""

    def __init__(self, message: str, timeout: float):
        super().__init__(message)
        self.timeout = timeout


class ConfigurationError(AnalysisError):
    """An explicitly supplied configuration resource could not be loaded."""

    pass
