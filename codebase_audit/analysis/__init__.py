"""Detector suites, one per analysis category."""

from .complexity import ComplexityAnalyzer, calculate_complexity
from .quality import QualityAnalyzer
from .security import SecurityAnalyzer
from .smells import SmellAnalyzer
from .style import StyleAnalyzer

__all__ = [
    "ComplexityAnalyzer",
    "QualityAnalyzer",
    "SecurityAnalyzer",
    "SmellAnalyzer",
    "StyleAnalyzer",
    "calculate_complexity",
]
