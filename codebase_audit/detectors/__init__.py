"""Single-pass security detectors, one per vulnerability class."""

from .base import Detector
from .credentials import HardcodedCredentialsDetector
from .crypto import InsecureCryptoDetector
from .deserialization import DeserializationDetector
from .entropy import HighEntropyStringDetector, calculate_shannon_entropy
from .insecure_imports import InsecureImportDetector
from .race_condition import RaceConditionDetector
from .sql_injection import SQLInjectionDetector
from .xss import XSSDetector

__all__ = [
    "DeserializationDetector",
    "Detector",
    "HardcodedCredentialsDetector",
    "HighEntropyStringDetector",
    "InsecureCryptoDetector",
    "InsecureImportDetector",
    "RaceConditionDetector",
    "SQLInjectionDetector",
    "XSSDetector",
    "calculate_shannon_entropy",
]
