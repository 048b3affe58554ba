"""
Parser configuration.
"""

import sys
from dataclasses import dataclass

# Python frames used per nesting level: parse_primary -> parse_expression
# for a parenthesis, one parse_primary for a prefix operator, plus headroom
# for the caller's own frames.
FRAMES_PER_NESTING_LEVEL = 3


def max_supported_nesting_depth() -> int:
    """Deepest nesting the current interpreter recursion limit can absorb."""
    return sys.getrecursionlimit() // FRAMES_PER_NESTING_LEVEL


@dataclass(frozen=True)
class ParserConfig:
    """
    Options for a single parse.

    Attributes:
        max_nesting_depth: Deepest allowed combination of open parentheses
            and chained prefix operators. Exceeding it raises a ParseError
            instead of exhausting the interpreter's recursion limit, so it
            may not exceed ``max_supported_nesting_depth()``.
        filename: Name recorded in every source location.
    """
    max_nesting_depth: int = 256
    filename: str = "<string>"

    def __post_init__(self):
        if self.max_nesting_depth < 1:
            raise ValueError(
                f"max_nesting_depth must be at least 1, got {self.max_nesting_depth}"
            )
        supported = max_supported_nesting_depth()
        if self.max_nesting_depth > supported:
            raise ValueError(
                f"max_nesting_depth {self.max_nesting_depth} exceeds {supported}, the deepest "
                f"nesting the recursion limit ({sys.getrecursionlimit()}) allows"
            )


DEFAULT_CONFIG = ParserConfig()
