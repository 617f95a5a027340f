"""PassAudit: password strength scoring, batch auditing and compliance checks."""

from .config import EngineConfig
from .evaluator import (
    CrackTimeBucket,
    Issue,
    PasswordProfile,
    PasswordStrengthEngine,
    ScoreResult,
    Strength,
    classify,
    evaluate,
    evaluate_batch,
    format_crack_time,
)

__version__ = "1.0.0"
