"""
passaudit.evaluator

Password strength engine:
- classify(password): character-class profile plus pattern flags
  (sequential runs, repeated runs, common-password deny-list)
- score(profile): composite 0-100 score, strength category, entropy,
  crack-time estimate and ordered issue identifiers
- suggest(profile): ordered issue identifiers only
- evaluate(password) / evaluate_batch(passwords): classify + score

Entropy is length * log2(nominal alphabet size). It is a theoretical upper
bound for the keyspace, not a measure of how predictable the chosen string is:
"Aaaaaaaaaaaa1!" gets the same entropy as a random string of the same classes.

Sequential-run detection only flags forward ascending runs ("abc", "123").
Descending runs ("cba", "321") and keyboard rows ("qwe") are not flagged
unless added through EngineConfig.extra_sequences.
"""

import enum
import functools
import logging
import math
import re
import string
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import EngineConfig

logger = logging.getLogger(__name__)

LOWERCASE_SIZE = 26
UPPERCASE_SIZE = 26
DIGIT_SIZE = 10
SYMBOL_SIZE = 32  # nominal, not len(DEFAULT_SYMBOLS)

LENGTH_POINTS_PER_CHAR = 4
LENGTH_POINTS_MAX = 40
UPPERCASE_POINTS = 10
LOWERCASE_POINTS = 10
DIGIT_POINTS = 10
SYMBOL_POINTS = 15
LONG_PASSWORD_LENGTH = 12
LONG_PASSWORD_BONUS = 10
SEQUENTIAL_PENALTY = 10
REPEATED_PENALTY = 10
COMMON_PASSWORD_CEILING = 20
SHORT_PASSWORD_LENGTH = 8
SHORT_PASSWORD_CEILING = 30

# 24 alphabetic windows (abc..xyz) and 8 numeric windows (012..789)
SEQUENTIAL_RUNS: Tuple[str, ...] = tuple(
    string.ascii_lowercase[i:i + 3] for i in range(len(string.ascii_lowercase) - 2)
) + tuple(string.digits[i:i + 3] for i in range(len(string.digits) - 2))

_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")
_REPEAT_RE = re.compile(r"(.)\1{2,}", re.DOTALL)


class Strength(enum.IntEnum):
    VERY_WEAK = 0
    WEAK = 1
    MODERATE = 2
    STRONG = 3
    VERY_STRONG = 4

    @property
    def key(self) -> str:
        return self.name.lower()

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    @classmethod
    def from_score(cls, score: int) -> "Strength":
        if score >= 80:
            return cls.VERY_STRONG
        if score >= 60:
            return cls.STRONG
        if score >= 40:
            return cls.MODERATE
        if score >= 20:
            return cls.WEAK
        return cls.VERY_WEAK


class Issue(str, enum.Enum):
    INPUT_TRUNCATED = "input_truncated"
    TOO_SHORT = "too_short"
    MISSING_UPPERCASE = "missing_uppercase"
    MISSING_LOWERCASE = "missing_lowercase"
    MISSING_DIGIT = "missing_digit"
    MISSING_SYMBOL = "missing_symbol"
    COMMON_PASSWORD = "common_password"
    SEQUENTIAL_PATTERN = "sequential_pattern"
    REPEATED_PATTERN = "repeated_pattern"
    SUFFICIENTLY_STRONG = "sufficiently_strong"


class CrackTimeBucket(str, enum.Enum):
    INSTANT = "instant"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    YEARS = "years"
    DECADES = "decades"
    CENTURIES = "centuries"
    UNCRACKABLE = "uncrackable"


# (exclusive upper bound in seconds, bucket, seconds per display unit, singular, plural)
_CRACK_TIME_BUCKETS = (
    (60, CrackTimeBucket.INSTANT, None, None, None),
    (3_600, CrackTimeBucket.MINUTES, 60, "minute", "minutes"),
    (86_400, CrackTimeBucket.HOURS, 3_600, "hour", "hours"),
    (31_536_000, CrackTimeBucket.DAYS, 86_400, "day", "days"),
    (3_153_600_000, CrackTimeBucket.YEARS, 31_536_000, "year", "years"),
    (31_536_000_000, CrackTimeBucket.DECADES, 3_153_600_000, "decade", "decades"),
    (315_360_000_000, CrackTimeBucket.CENTURIES, 31_536_000_000, "century", "centuries"),
)


def crack_time_bucket(seconds: float) -> CrackTimeBucket:
    """Map raw seconds to a display bucket. A value on a bound belongs to the next bucket."""
    for bound, bucket, _, _, _ in _CRACK_TIME_BUCKETS:
        if seconds < bound:
            return bucket
    return CrackTimeBucket.UNCRACKABLE


def format_crack_time(seconds: float) -> str:
    """Human-readable crack time, e.g. '5 minutes' or 'Effectively uncrackable'."""
    for bound, _, unit, singular, plural in _CRACK_TIME_BUCKETS:
        if seconds < bound:
            if unit is None:
                return "Less than a minute"
            n = round(seconds / unit)
            return f"{n} {singular if n == 1 else plural}"
    return "Effectively uncrackable"


@dataclass(frozen=True)
class PasswordProfile:
    length: int
    has_uppercase: bool
    has_lowercase: bool
    has_digit: bool
    has_symbol: bool
    charset_size: int
    has_sequential_run: bool
    has_repeated_run: bool
    is_common_password: bool
    truncated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreResult:
    score: int
    strength: Strength
    entropy_bits: float
    crack_time_seconds: float
    issues: List[Issue]
    profile: PasswordProfile

    @property
    def crack_time_bucket(self) -> CrackTimeBucket:
        return crack_time_bucket(self.crack_time_seconds)

    @property
    def crack_time(self) -> str:
        return format_crack_time(self.crack_time_seconds)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view. An unrepresentably large crack time is reported as None."""
        seconds = self.crack_time_seconds
        return {
            "score": self.score,
            "strength": self.strength.key,
            "label": self.strength.label,
            "entropy": self.entropy_bits,
            "crack_time_seconds": seconds if math.isfinite(seconds) else None,
            "crack_time_bucket": self.crack_time_bucket.value,
            "crack_time": self.crack_time,
            "issues": [i.value for i in self.issues],
            "profile": self.profile.to_dict(),
        }


def estimate_entropy(charset_size: int, length: int) -> float:
    if charset_size <= 0 or length <= 0:
        return 0.0
    return length * math.log2(charset_size)


def estimate_crack_seconds(charset_size: int, length: int, guess_rate: float) -> float:
    """
    Seconds to exhaust charset_size ** length at guess_rate guesses/second.
    An empty charset counts as 1 so that an empty password still yields 1 possibility.
    """
    if not (math.isfinite(guess_rate) and guess_rate > 0):
        return 0.0
    possibilities = max(charset_size, 1) ** length
    try:
        return possibilities / guess_rate
    except OverflowError:
        return math.inf


def detect_repeated_run(password: str) -> bool:
    """True when any character appears 3+ times in a row ('aaa', '111')."""
    return _REPEAT_RE.search(password) is not None


def _sequence_pattern(extra: Iterable[str] = ()) -> "re.Pattern[str]":
    runs = list(SEQUENTIAL_RUNS) + [s for s in extra if s not in SEQUENTIAL_RUNS]
    # ASCII so that IGNORECASE does not fold e.g. the Kelvin sign into 'k'
    return re.compile("|".join(re.escape(r) for r in runs), re.IGNORECASE | re.ASCII)


_DEFAULT_SEQUENCE_RE = _sequence_pattern()


def detect_sequential_run(password: str) -> bool:
    """True when the password contains a forward ascending run like 'abc' or '456'."""
    return _DEFAULT_SEQUENCE_RE.search(password) is not None


class PasswordStrengthEngine:
    """
    Stateless scorer. All rule constants come from EngineConfig; the instance
    holds no mutable state, so one engine can be shared across threads.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.warnings: Tuple[str, ...] = tuple(self.config.validate())
        for w in self.warnings:
            logger.warning("Engine configuration: %s", w)
        self._symbols = frozenset(self.config.symbol_charset)
        if self.config.extra_sequences:
            self._sequence_re = _sequence_pattern(self.config.extra_sequences)
        else:
            self._sequence_re = _DEFAULT_SEQUENCE_RE

    def classify(self, password: str) -> "PasswordProfile":
        limit = self.config.effective_max_input_length
        truncated = len(password) > limit
        if truncated:
            password = password[:limit]

        has_upper = _UPPER_RE.search(password) is not None
        has_lower = _LOWER_RE.search(password) is not None
        has_digit = _DIGIT_RE.search(password) is not None
        has_symbol = any(c in self._symbols for c in password)

        charset = 0
        if has_lower:
            charset += LOWERCASE_SIZE
        if has_upper:
            charset += UPPERCASE_SIZE
        if has_digit:
            charset += DIGIT_SIZE
        if has_symbol:
            charset += SYMBOL_SIZE

        return PasswordProfile(
            length=len(password),
            has_uppercase=has_upper,
            has_lowercase=has_lower,
            has_digit=has_digit,
            has_symbol=has_symbol,
            charset_size=charset,
            has_sequential_run=self._sequence_re.search(password) is not None,
            has_repeated_run=detect_repeated_run(password),
            is_common_password=password.lower() in self.config.common_passwords,
            truncated=truncated,
        )

    def suggest(self, profile: PasswordProfile) -> List[Issue]:
        issues: List[Issue] = []
        if profile.truncated:
            issues.append(Issue.INPUT_TRUNCATED)
        if profile.length < LONG_PASSWORD_LENGTH:
            issues.append(Issue.TOO_SHORT)
        if not profile.has_uppercase:
            issues.append(Issue.MISSING_UPPERCASE)
        if not profile.has_lowercase:
            issues.append(Issue.MISSING_LOWERCASE)
        if not profile.has_digit:
            issues.append(Issue.MISSING_DIGIT)
        if not profile.has_symbol:
            issues.append(Issue.MISSING_SYMBOL)
        if profile.is_common_password:
            issues.append(Issue.COMMON_PASSWORD)
        if profile.has_sequential_run:
            issues.append(Issue.SEQUENTIAL_PATTERN)
        if profile.has_repeated_run:
            issues.append(Issue.REPEATED_PATTERN)
        if not issues:
            issues.append(Issue.SUFFICIENTLY_STRONG)
        return issues

    def score(self, profile: PasswordProfile) -> ScoreResult:
        total = min(profile.length * LENGTH_POINTS_PER_CHAR, LENGTH_POINTS_MAX)
        if profile.has_uppercase:
            total += UPPERCASE_POINTS
        if profile.has_lowercase:
            total += LOWERCASE_POINTS
        if profile.has_digit:
            total += DIGIT_POINTS
        if profile.has_symbol:
            total += SYMBOL_POINTS
        if profile.length >= LONG_PASSWORD_LENGTH:
            total += LONG_PASSWORD_BONUS
        if profile.has_sequential_run:
            total -= SEQUENTIAL_PENALTY
        if profile.has_repeated_run:
            total -= REPEATED_PENALTY

        # ceilings cap the additive score; the tighter one wins
        if profile.is_common_password:
            total = min(total, COMMON_PASSWORD_CEILING)
        if profile.length < SHORT_PASSWORD_LENGTH:
            total = min(total, SHORT_PASSWORD_CEILING)
        total = max(0, min(total, 100))

        return ScoreResult(
            score=total,
            strength=Strength.from_score(total),
            entropy_bits=estimate_entropy(profile.charset_size, profile.length),
            crack_time_seconds=estimate_crack_seconds(
                profile.charset_size, profile.length, self.config.guess_rate
            ),
            issues=self.suggest(profile),
            profile=profile,
        )

    def evaluate(self, password: str) -> ScoreResult:
        return self.score(self.classify(password))

    def evaluate_batch(self, passwords: Iterable[str], workers: Optional[int] = None) -> List[ScoreResult]:
        """
        Evaluate every password; result[i] always belongs to passwords[i].
        With workers > 1 the work is spread over a thread pool.
        """
        items = list(passwords)
        if workers and workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                return list(pool.map(self.evaluate, items))
        return [self.evaluate(p) for p in items]


_default_engine = PasswordStrengthEngine()


def default_engine() -> PasswordStrengthEngine:
    return _default_engine


def classify(password: str) -> PasswordProfile:
    return _default_engine.classify(password)


def score(profile: PasswordProfile) -> ScoreResult:
    return _default_engine.score(profile)


def suggest(profile: PasswordProfile) -> List[Issue]:
    return _default_engine.suggest(profile)


@functools.lru_cache(maxsize=16)
def _engine_for_rate(guess_rate: float) -> PasswordStrengthEngine:
    return PasswordStrengthEngine(EngineConfig(guess_rate=guess_rate))


def engine_for(guess_rate: Optional[float] = None) -> PasswordStrengthEngine:
    """Default-rules engine for a guess rate; one engine (and one config warning) per rate."""
    if guess_rate is None:
        return _default_engine
    guess_rate = float(guess_rate)
    if math.isnan(guess_rate):
        # every NaN shares one cache slot
        guess_rate = math.nan
    return _engine_for_rate(guess_rate)


def evaluate(password: str, guess_rate: Optional[float] = None) -> ScoreResult:
    """Score one password with the default rules, optionally overriding the attacker guess rate."""
    return engine_for(guess_rate).evaluate(password)


def evaluate_batch(
    passwords: Iterable[str], guess_rate: Optional[float] = None, workers: Optional[int] = None
) -> List[ScoreResult]:
    return engine_for(guess_rate).evaluate_batch(passwords, workers=workers)
