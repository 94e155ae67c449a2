"""High-entropy string literals, a common sign of embedded secrets."""

import math
from collections import Counter

from tree_sitter import Node

from ..utils.ast_helpers import is_string_literal, string_literal_value
from .base import Detector

ENTROPY_THRESHOLD = 4.0
MIN_STRING_LENGTH = 8


def calculate_shannon_entropy(value: str | None) -> float:
    """Shannon entropy of ``value`` in bits per character.

    Returns 0.0 for empty input.
    """
    if not value:
        return 0.0
    length = len(value)
    entropy = 0.0
    for count in Counter(value).values():
        probability = count / length
        entropy -= probability * math.log2(probability)
    return entropy


class HighEntropyStringDetector(Detector):
    name = "entropy"

    def __init__(
        self,
        findings=None,
        threshold: float = ENTROPY_THRESHOLD,
        min_length: int = MIN_STRING_LENGTH,
    ):
        super().__init__(findings)
        self.threshold = threshold
        self.min_length = min_length

    def visit_string_literal(self, node: Node) -> None:
        if not is_string_literal(node):
            return
        value = string_literal_value(node)
        if len(value) < self.min_length:
            return
        if calculate_shannon_entropy(value) > self.threshold:
            self.report(node, f'High entropy string detected: "{value}".')
