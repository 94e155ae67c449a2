"""Result types produced by the analysis suites."""

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass
class Finding:
    """One reported issue."""

    message: str
    line: int = -1


def violation(line: int, description: str) -> Finding:
    """Build a finding rendered as ``Violation at line <n>: <description>``."""
    return Finding(message=f"Violation at line {line}: {description}", line=line)


@dataclass
class RepositoryInfo:
    """Where an analyzed file came from."""

    username: str
    repo: str
    commit_id: str
    path: str

    def __str__(self) -> str:
        return (
            f"username='{self.username}'\n"
            f"repo='{self.repo}'\n"
            f"commitId='{self.commit_id}'\n"
            f"path='{self.path}'"
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "username": self.username,
            "repo": self.repo,
            "commitId": self.commit_id,
            "path": self.path,
        }


@dataclass
class AnalysisResult:
    """Ordered findings of one category.

    ``count`` is always derived from ``items`` so the two cannot disagree.
    """

    category: ClassVar[str] = "analysis"
    title: ClassVar[str] = "Code Analysis Result"
    items_label: ClassVar[str] = "Findings"

    items: list[str] = field(default_factory=list)
    repository_info: RepositoryInfo | None = None
    custom_id: str | None = None
    document_id: str | None = None

    @classmethod
    def from_findings(cls, findings: list[Finding]) -> "AnalysisResult":
        return cls(items=[finding.message for finding in findings])

    @property
    def count(self) -> int:
        return len(self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "items": list(self.items),
            "count": self.count,
            "customId": self.custom_id,
            "id": self.document_id,
            "repositoryInfo": self.repository_info.to_dict() if self.repository_info else None,
        }

    def summary(self, include_custom_id: bool = True) -> str:
        """Multi-line text form used for repository comments."""
        lines = [f"{self.title}:"]
        if include_custom_id:
            lines.append(f"  Custom ID: '{self.custom_id}',")
        lines.append(f"  Number of {self.items_label}: '{self.count}',")
        lines.append(f"  {self.items_label}: [")
        lines.extend(f"    {item}," for item in self.items)
        if self.items:
            # no trailing comma after the last entry
            lines[-1] = lines[-1][:-1]
        lines.append("  ]")
        return "\n".join(lines)


@dataclass
class StyleResult(AnalysisResult):
    category: ClassVar[str] = "style"
    title: ClassVar[str] = "Code Style Analysis Result"
    items_label: ClassVar[str] = "Violations"


@dataclass
class SecurityResult(AnalysisResult):
    category: ClassVar[str] = "security"
    title: ClassVar[str] = "Code Security Analysis Result"
    items_label: ClassVar[str] = "Vulnerabilities"


@dataclass
class SmellResult(AnalysisResult):
    category: ClassVar[str] = "smells"
    title: ClassVar[str] = "Code Smell Analysis Result"
    items_label: ClassVar[str] = "Smells"


@dataclass
class QualityResult(AnalysisResult):
    category: ClassVar[str] = "quality"
    title: ClassVar[str] = "Code Quality Analysis Result"
    items_label: ClassVar[str] = "Issues"


@dataclass
class ComplexityResult:
    """Cyclomatic complexity score of one file."""

    category: ClassVar[str] = "complexity"

    cyclomatic_complexity: int = 0
    repository_info: RepositoryInfo | None = None
    custom_id: str | None = None
    document_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "cyclomaticComplexity": self.cyclomatic_complexity,
            "customId": self.custom_id,
            "id": self.document_id,
            "repositoryInfo": self.repository_info.to_dict() if self.repository_info else None,
        }

    def summary(self, include_custom_id: bool = True) -> str:
        lines = ["Code Complexity Analysis Result:"]
        if include_custom_id:
            lines.append(f"  Custom ID: '{self.custom_id}',")
        lines.append(f"  Complexity Value: '{self.cyclomatic_complexity}'")
        return "\n".join(lines)


@dataclass
class CombinedResult:
    """All five categories computed from a single parse."""

    style: StyleResult
    complexity: ComplexityResult
    security: SecurityResult
    smells: SmellResult
    quality: QualityResult
    repository_info: RepositoryInfo | None = None
    custom_id: str | None = None
    document_id: str | None = None

    def categories(self) -> dict[str, AnalysisResult | ComplexityResult]:
        return {
            "style": self.style,
            "complexity": self.complexity,
            "security": self.security,
            "smells": self.smells,
            "quality": self.quality,
        }

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            name: result.to_dict() for name, result in self.categories().items()
        }
        payload["customId"] = self.custom_id
        payload["id"] = self.document_id
        payload["repositoryInfo"] = self.repository_info.to_dict() if self.repository_info else None
        return payload

    def summary(self) -> str:
        return "\n".join(
            [
                "Code Analysis Result:",
                f"  Custom ID: '{self.custom_id}',",
                f"  Quality Results: '{self.quality.summary(include_custom_id=False)}',",
                f"  Smells Results: '{self.smells.summary(include_custom_id=False)}',",
                f"  Complexity Results: '{self.complexity.summary(include_custom_id=False)}',",
                f"  Security Results: '{self.security.summary(include_custom_id=False)}',",
                f"  Style Results: '{self.style.summary(include_custom_id=False)}',",
            ]
        )
