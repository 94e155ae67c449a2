"""Thresholds and lookup tables used by the detector suites."""

import json
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from loguru import logger

from .exceptions import ConfigurationError

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_INSECURE_IMPORTS_PATH = DATA_DIR / "deprecated_apis.json"


@dataclass(frozen=True)
class SmellThresholds:
    """Limits above which a code smell is reported."""

    max_method_params: int = 3  # reported when count >= this value
    max_method_length: int = 30
    max_class_methods: int = 10
    max_class_length: int = 200
    max_constructor_params: int = 5
    max_primitive_params: int = 3
    max_chain_length: int = 2


@dataclass(frozen=True)
class SecurityConfig:
    entropy_threshold: float = 4.0
    min_entropy_length: int = 8
    weak_algorithms: frozenset[str] = frozenset({"DES", "MD5", "RC4"})
    insecure_imports_path: Path | None = None


@dataclass(frozen=True)
class StyleConfig:
    indentation: int = 4
    timeout: float = 60.0
    max_workers: int = field(default_factory=lambda: os.cpu_count() or 1)


@dataclass(frozen=True)
class AnalysisConfig:
    """Bundle of per-category settings passed to the service layer."""

    smells: SmellThresholds = field(default_factory=SmellThresholds)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    style: StyleConfig = field(default_factory=StyleConfig)


DEFAULT_CONFIG = AnalysisConfig()


def load_insecure_imports(path: Path | str | None = None) -> dict[str, str]:
    """Load the ``insecureImports`` table mapping import names to replacements.

    The packaged table is read once per process. A missing or broken packaged
    table is logged and treated as empty; an explicitly supplied path that
    cannot be loaded raises ConfigurationError.
    """
    if path is None:
        return dict(_load_default_insecure_imports())
    try:
        return _read_insecure_imports(Path(path))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot load insecure import table from {path}: {e}") from e


@lru_cache(maxsize=1)
def _load_default_insecure_imports() -> tuple[tuple[str, str], ...]:
    try:
        table = _read_insecure_imports(DEFAULT_INSECURE_IMPORTS_PATH)
    except (OSError, ValueError) as e:
        logger.warning(f"Insecure import table unavailable, import check disabled: {e}")
        return ()
    logger.debug(f"Loaded {len(table)} insecure import entries")
    return tuple(table.items())


def _read_insecure_imports(path: Path) -> dict[str, str]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    table = data.get("insecureImports") if isinstance(data, dict) else None
    if not isinstance(table, dict):
        raise ValueError("missing 'insecureImports' object")
    return {str(name): str(replacement) for name, replacement in table.items()}
