"""
passaudit.suggestions

Turn engine issue identifiers into concrete, ordered advice and produce
example replacement passwords (using generator) to demonstrate stronger choices.
The examples are never scored; they only illustrate the advice.
"""

from typing import Dict, List, Optional

from .evaluator import Issue, PasswordStrengthEngine, default_engine
from .generator import generate

ISSUE_MESSAGES: Dict[Issue, str] = {
    Issue.INPUT_TRUNCATED: "Input was longer than the analysis limit; only the first part was checked.",
    Issue.TOO_SHORT: "Increase length to at least 12 characters.",
    Issue.MISSING_UPPERCASE: "Add uppercase letters (A-Z).",
    Issue.MISSING_LOWERCASE: "Add lowercase letters (a-z).",
    Issue.MISSING_DIGIT: "Include numbers (0-9).",
    Issue.MISSING_SYMBOL: "Use special characters (!@#$%^&*).",
    Issue.COMMON_PASSWORD: "Avoid common words and passwords.",
    Issue.SEQUENTIAL_PATTERN: "Avoid sequential patterns (abc, 123).",
    Issue.REPEATED_PATTERN: "Avoid repeated characters (aaa, 111).",
    Issue.SUFFICIENTLY_STRONG: "Excellent password! Consider using a password manager to securely store it.",
}


def describe_issue(issue: Issue) -> str:
    return ISSUE_MESSAGES[issue]


def suggest_improvements(password: str, engine: Optional[PasswordStrengthEngine] = None, examples: int = 1) -> Dict:
    """
    Return a suggestion object derived from the engine.
    {
        "score": int,
        "label": str,
        "issues": [str],       # issue identifiers in evaluation order
        "suggestions": [str],  # human-readable advice, same order
        "examples": [str],     # generated example passwords (empty when already strong)
    }
    """
    engine = engine or default_engine()
    result = engine.evaluate(password)
    suggestions: List[str] = [describe_issue(i) for i in result.issues]

    sample: List[str] = []
    if result.issues != [Issue.SUFFICIENTLY_STRONG]:
        length = max(16, min(result.profile.length + 4, 64))
        sample = [generate(length=length) for _ in range(max(examples, 0))]

    return {
        "score": result.score,
        "label": result.strength.label,
        "issues": [i.value for i in result.issues],
        "suggestions": suggestions,
        "examples": sample,
    }
