"""
Refinement module for Murajaa library.

Provides the abstract analyzer interface and a chat-completions implementation
for semantic re-scoring of a recitation check.
"""

from murajaa.refinement.base import BaseAnalyzer, describe_strictness
from murajaa.refinement.chat import (
    AnalyzerConfig,
    ChatCompletionAnalyzer,
    MODEL_PRICING,
    estimate_cost,
    parse_analysis,
)

__all__ = [
    "BaseAnalyzer",
    "describe_strictness",
    "AnalyzerConfig",
    "ChatCompletionAnalyzer",
    "MODEL_PRICING",
    "estimate_cost",
    "parse_analysis",
]
