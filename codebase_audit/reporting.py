"""Plain-text reports and identifiers handed to notification and storage collaborators."""

from datetime import datetime

from .models import (
    AnalysisResult,
    CombinedResult,
    ComplexityResult,
    QualityResult,
    RepositoryInfo,
    SecurityResult,
    SmellResult,
    StyleResult,
)


def generate_custom_id(username: str, repo: str, path: str, now: datetime | None = None) -> str:
    """Readable identifier ``<username>-<repo>-<path>-<ISO local datetime>``."""
    timestamp = (now or datetime.now()).isoformat()
    return f"{username}-{repo}-{path}-{timestamp}"


def attach_metadata(
    result: AnalysisResult | ComplexityResult | CombinedResult,
    repository_info: RepositoryInfo | None = None,
    custom_id: str | None = None,
    document_id: str | None = None,
) -> AnalysisResult | ComplexityResult | CombinedResult:
    """Set repository metadata on a result (and on each category of a combined result)."""
    targets = [result]
    if isinstance(result, CombinedResult):
        targets.extend(result.categories().values())
    for target in targets:
        target.repository_info = repository_info
        target.custom_id = custom_id
        target.document_id = document_id
    return result


def _itemized_report(
    title: str,
    heading: str,
    empty_message: str,
    result: AnalysisResult,
    document_id: str | None,
) -> str:
    lines = [
        f"{title} Analysis Report (ID: {document_id}):\n",
        f"Repository Info : {result.repository_info}):\n",
        f"{heading} Detected (Total: {result.count}):\n",
    ]
    if not result.items:
        lines.append(empty_message)
    else:
        lines.extend(f" - {item}\n" for item in result.items)
    return "".join(lines)


def compose_security_report(result: SecurityResult, document_id: str | None = None) -> str:
    return _itemized_report(
        "Security", "Security Issues", "No vulnerabilities found.", result, document_id
    )


def compose_style_report(result: StyleResult, document_id: str | None = None) -> str:
    return _itemized_report(
        "Style", "Style Issues", "No style issues detected.", result, document_id
    )


def compose_smell_report(result: SmellResult, document_id: str | None = None) -> str:
    return _itemized_report(
        "Smell", "Smell Issues", "No code smells detected.", result, document_id
    )


def compose_quality_report(result: QualityResult, document_id: str | None = None) -> str:
    return _itemized_report(
        "Quality", "Quality Issues", "No Quality issues detected.", result, document_id
    )


def compose_complexity_report(result: ComplexityResult, document_id: str | None = None) -> str:
    return (
        f"Complexity Analysis Report (ID: {document_id}):\n"
        f"Repository Info: {result.repository_info}\n"
        f"Cyclomatic Complexity Score: {result.cyclomatic_complexity}"
    )


def _summary(heading: str, empty_message: str, result: AnalysisResult | None) -> str:
    if result is None or not result.items:
        return f"{empty_message} \n"
    lines = [f"{heading} Detected (Total: {result.count}):\n"]
    lines.extend(f" - {item}\n" for item in result.items)
    return "".join(lines)


def _complexity_summary(result: ComplexityResult | None) -> str:
    # A zero score is indistinguishable from "not run"
    if result is None or result.cyclomatic_complexity == 0:
        return "Cyclomatic complexity not calculated. \n"
    return f"Cyclomatic complexity score: {result.cyclomatic_complexity}\n"


def compose_combined_report(result: CombinedResult, document_id: str | None = None) -> str:
    """All five categories, quality first, in one message."""
    return "".join(
        [
            f"Combined Analysis Report (ID: {document_id}):\n",
            f"Repository Info : {result.repository_info}):\n",
            "Quality Analysis: "
            + _summary("Quality Issues", "No quality issues detected.", result.quality)
            + "\n",
            "Code Smell Analysis: "
            + _summary("Code Smells", "No code smells detected.", result.smells)
            + "\n",
            "Security Analysis: "
            + _summary(
                "Security Vulnerabilities", "No security vulnerabilities detected.", result.security
            )
            + "\n",
            "Complexity Analysis: " + _complexity_summary(result.complexity) + "\n",
            "Style Analysis: "
            + _summary("Style Violations", "No style violations found.", result.style)
            + "\n",
        ]
    )
