"""Text rewriting building blocks.

This package provides rewrite rules, delimiter balancing, and code-region
protection used by the normalization stages.
"""

from .balancing import DelimiterBalancer
from .protection import RegionProtector
from .rules import CallableReplacement, Rule, RuleSet, TemplateReplacement

__all__ = [
    "CallableReplacement",
    "DelimiterBalancer",
    "RegionProtector",
    "Rule",
    "RuleSet",
    "TemplateReplacement",
]
