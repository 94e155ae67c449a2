"""Top-level entry points, one per analysis category plus a combined run."""

from loguru import logger

from .analysis import (
    ComplexityAnalyzer,
    QualityAnalyzer,
    SecurityAnalyzer,
    SmellAnalyzer,
    StyleAnalyzer,
)
from .config import DEFAULT_CONFIG, AnalysisConfig
from .models import (
    CombinedResult,
    ComplexityResult,
    QualityResult,
    SecurityResult,
    SmellResult,
    StyleResult,
)
from .parser_loader import JavaSource, parse_java
from .processing import ParallelCheckRunner


def _parsed(source: str | JavaSource) -> JavaSource:
    if isinstance(source, JavaSource):
        return source
    return parse_java(source)


def _runner(config: AnalysisConfig, parallel: bool) -> ParallelCheckRunner | None:
    if not parallel:
        return None
    return ParallelCheckRunner(num_workers=config.style.max_workers, timeout=config.style.timeout)


def analyze_style(
    source: str | JavaSource, config: AnalysisConfig = DEFAULT_CONFIG
) -> StyleResult:
    """Run the style checks concurrently.

    Raises:
        ParseError: if ``source`` is not valid Java.
        AnalysisTimeoutError: if the checks do not finish in time.
    """
    parsed = _parsed(source)
    findings = StyleAnalyzer(config.style).analyze(parsed)
    return StyleResult.from_findings(findings)


def analyze_complexity(source: str | JavaSource) -> ComplexityResult:
    parsed = _parsed(source)
    score = ComplexityAnalyzer().score(parsed.root)
    logger.info(f"Complexity analysis scored {score}")
    return ComplexityResult(cyclomatic_complexity=score)


def analyze_security(
    source: str | JavaSource, config: AnalysisConfig = DEFAULT_CONFIG, parallel: bool = False
) -> SecurityResult:
    parsed = _parsed(source)
    findings = SecurityAnalyzer(config.security).analyze(parsed, _runner(config, parallel))
    return SecurityResult.from_findings(findings)


def analyze_smells(
    source: str | JavaSource, config: AnalysisConfig = DEFAULT_CONFIG, parallel: bool = False
) -> SmellResult:
    parsed = _parsed(source)
    findings = SmellAnalyzer(config.smells).analyze(parsed, _runner(config, parallel))
    return SmellResult.from_findings(findings)


def analyze_quality(
    source: str | JavaSource, config: AnalysisConfig = DEFAULT_CONFIG, parallel: bool = False
) -> QualityResult:
    parsed = _parsed(source)
    findings = QualityAnalyzer().analyze(parsed, _runner(config, parallel))
    return QualityResult.from_findings(findings)


def analyze_all(
    source: str | JavaSource, config: AnalysisConfig = DEFAULT_CONFIG, parallel: bool = False
) -> CombinedResult:
    """Parse once and run all five categories over the same tree."""
    parsed = _parsed(source)
    result = CombinedResult(
        style=analyze_style(parsed, config),
        complexity=analyze_complexity(parsed),
        security=analyze_security(parsed, config, parallel),
        smells=analyze_smells(parsed, config, parallel),
        quality=analyze_quality(parsed, config, parallel),
    )
    logger.info(
        f"Combined analysis: {result.style.count} style, {result.security.count} security, "
        f"{result.smells.count} smells, {result.quality.count} quality, "
        f"complexity {result.complexity.cyclomatic_complexity}"
    )
    return result
