"""Tree-sitter helpers shared by the analysis suites."""
