"""Single-file static analysis for Java sources."""

from .exceptions import AnalysisError, AnalysisTimeoutError, ConfigurationError, ParseError
from .models import (
    CombinedResult,
    ComplexityResult,
    Finding,
    QualityResult,
    RepositoryInfo,
    SecurityResult,
    SmellResult,
    StyleResult,
)
from .parser_loader import JavaSource, parse_java
from .service import (
    analyze_all,
    analyze_complexity,
    analyze_quality,
    analyze_security,
    analyze_smells,
    analyze_style,
)

__all__ = [
    "AnalysisError",
    "AnalysisTimeoutError",
    "CombinedResult",
    "ComplexityResult",
    "ConfigurationError",
    "Finding",
    "JavaSource",
    "ParseError",
    "QualityResult",
    "RepositoryInfo",
    "SecurityResult",
    "SmellResult",
    "StyleResult",
    "analyze_all",
    "analyze_complexity",
    "analyze_quality",
    "analyze_security",
    "analyze_smells",
    "analyze_style",
    "parse_java",
]
