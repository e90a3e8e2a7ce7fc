"""
Tasks module: the four steps of the medical translation workflow.

Key exports:
- check_domain(): Is the text medical?
- translate(): Spanish -> technical English
- simplify(): Technical English -> plain English
- estimate_quality(): 0-100 score for the plain-language text
"""

from hcailt.tasks.handlers import (
    check_domain,
    estimate_quality,
    is_medical_answer,
    parse_quality_score,
    simplify,
    translate,
)

__all__ = [
    "check_domain",
    "translate",
    "simplify",
    "estimate_quality",
    "is_medical_answer",
    "parse_quality_score",
]
