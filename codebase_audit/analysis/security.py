"""Security vulnerability detection for Java sources."""

from loguru import logger

from ..config import SecurityConfig, load_insecure_imports
from ..detectors import (
    DeserializationDetector,
    HardcodedCredentialsDetector,
    HighEntropyStringDetector,
    InsecureCryptoDetector,
    InsecureImportDetector,
    RaceConditionDetector,
    SQLInjectionDetector,
    XSSDetector,
)
from ..models import Finding
from ..parser_loader import JavaSource
from ..processing import CheckTask, ParallelCheckRunner, run_sequential


class SecurityAnalyzer:
    """Runs the eight security detectors over one parsed file.

    Every detector is a fresh instance per call and walks the whole tree on
    its own. Findings keep detector order: insecure imports, SQL injection,
    XSS, deserialization, hardcoded credentials, race conditions, weak
    crypto, high-entropy strings.
    """

    def __init__(
        self,
        config: SecurityConfig | None = None,
        insecure_imports: dict[str, str] | None = None,
    ):
        self.config = config or SecurityConfig()
        if insecure_imports is None:
            insecure_imports = load_insecure_imports(self.config.insecure_imports_path)
        self.insecure_imports = insecure_imports

    def tasks(self, source: JavaSource) -> list[CheckTask]:
        root = source.root
        detectors = [
            InsecureImportDetector(insecure_imports=self.insecure_imports),
            SQLInjectionDetector(),
            XSSDetector(),
            DeserializationDetector(),
            HardcodedCredentialsDetector(),
            RaceConditionDetector(),
            InsecureCryptoDetector(weak_algorithms=self.config.weak_algorithms),
            HighEntropyStringDetector(
                threshold=self.config.entropy_threshold,
                min_length=self.config.min_entropy_length,
            ),
        ]
        return [
            CheckTask(name=detector.name, run=lambda d=detector: d.run(root))
            for detector in detectors
        ]

    def analyze(
        self, source: JavaSource, runner: ParallelCheckRunner | None = None
    ) -> list[Finding]:
        tasks = self.tasks(source)
        findings = runner.run(tasks) if runner is not None else run_sequential(tasks)
        logger.info(f"Security analysis found {len(findings)} issues")
        return findings
