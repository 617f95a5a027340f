# passaudit/config.py
"""
Engine configuration and simple settings persistence for PassAudit.
Settings saved as JSON in %APPDATA%/PassAudit/config.json (Windows) or ~/.passaudit/config.json (fallback).
PASSAUDIT_CONFIG overrides the location.
"""

import os
import json
import math
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Any, FrozenSet, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# 100 billion guesses/sec: an offline GPU-cluster attacker
DEFAULT_GUESS_RATE = 1e11

DEFAULT_MAX_INPUT_LENGTH = 1024

# canonical symbol class: the 30 characters of the analyzer's symbol regex.
# SYMBOL_SIZE (32) in the evaluator is the nominal alphabet size and differs on purpose.
DEFAULT_SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

COMMON_PASSWORDS: FrozenSet[str] = frozenset({
    "password", "123456", "12345678", "qwerty", "abc123",
    "monkey", "1234567", "letmein", "trustno1", "dragon",
    "baseball", "iloveyou", "master", "sunshine", "ashley",
    "bailey", "passw0rd", "shadow", "123123", "654321",
    "superman", "qazwsx", "michael", "football", "welcome",
    "jesus", "ninja", "mustang", "password1", "123456789",
    "starwars", "computer", "solo", "jordan", "pepper",
    "whatever", "charlie", "cheese", "freedom", "princess",
})


@dataclass(frozen=True)
class EngineConfig:
    """Rule constants for the strength engine. Immutable once built."""

    guess_rate: float = DEFAULT_GUESS_RATE
    common_passwords: FrozenSet[str] = COMMON_PASSWORDS
    symbol_charset: str = DEFAULT_SYMBOLS
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH
    # additional 3+ char sequences to flag as sequential runs (e.g. "cba", "qwe")
    extra_sequences: Tuple[str, ...] = field(default_factory=tuple)
    # settings that were dropped or replaced by a default; reported by validate()
    rejected_settings: Tuple[str, ...] = field(default_factory=tuple, compare=False)

    def __post_init__(self):
        rejected = list(self.rejected_settings)
        # deny-list matching is case-insensitive
        passwords = set()
        for p in self.common_passwords:
            if isinstance(p, str):
                passwords.add(p.lower())
            else:
                rejected.append(f"common_passwords: ignored non-string entry {p!r}")
        sequences = []
        for s in self.extra_sequences:
            if isinstance(s, str) and len(s) >= 3:
                sequences.append(s.lower())
            else:
                rejected.append(f"extra_sequences: ignored {s!r} (need a string of 3+ characters)")
        object.__setattr__(self, "common_passwords", frozenset(passwords))
        object.__setattr__(self, "extra_sequences", tuple(sequences))
        object.__setattr__(self, "rejected_settings", tuple(rejected))

    def with_common_passwords(self, extra: Iterable[str]) -> "EngineConfig":
        """Return a copy whose deny-list also contains `extra`."""
        return replace(self, common_passwords=self.common_passwords | frozenset(extra))

    @property
    def effective_max_input_length(self) -> int:
        if self.max_input_length <= 0:
            return DEFAULT_MAX_INPUT_LENGTH
        return self.max_input_length

    @property
    def guess_rate_valid(self) -> bool:
        return math.isfinite(self.guess_rate) and self.guess_rate > 0

    def validate(self) -> List[str]:
        """Return human-readable warnings for malformed settings (empty when fine)."""
        warnings: List[str] = list(self.rejected_settings)
        if not self.guess_rate_valid:
            warnings.append(
                f"guess_rate must be a positive finite number (got {self.guess_rate!r}); "
                "crack time estimates will be 0"
            )
        if not self.symbol_charset:
            warnings.append("symbol_charset is empty; no character will count as a symbol")
        if self.max_input_length <= 0:
            warnings.append(
                f"max_input_length must be positive (got {self.max_input_length}); "
                f"using {DEFAULT_MAX_INPUT_LENGTH}"
            )
        return warnings


DEFAULTS: Dict[str, Any] = {
    "guess_rate": DEFAULT_GUESS_RATE,
    "extra_common_passwords": [],
    "symbol_charset": DEFAULT_SYMBOLS,
    "max_input_length": DEFAULT_MAX_INPUT_LENGTH,
    "extra_sequences": [],
}


def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        d = os.path.join(appdata, "PassAudit")
    else:
        d = os.path.join(os.path.expanduser("~"), ".passaudit")
    return d


def config_path() -> str:
    override = os.getenv("PASSAUDIT_CONFIG")
    if override:
        return override
    return os.path.join(_appdata_dir(), "config.json")


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    p = path or config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read settings from %s (%s); using defaults", p, e)
        return DEFAULTS.copy()
    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a JSON object; using defaults", p)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    out.update(data)
    return out


def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> str:
    p = path or config_path()
    d = os.path.dirname(p)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
    return p


def _setting_number(settings: Dict[str, Any], key: str, default, cast, rejected: List[str]):
    value = settings.get(key, default)
    if isinstance(value, bool):
        rejected.append(f"{key}: expected a number, got {value!r}; using {default}")
        return default
    try:
        return cast(value)
    except (TypeError, ValueError, OverflowError):
        rejected.append(f"{key}: expected a number, got {value!r}; using {default}")
        return default


def _setting_strings(settings: Dict[str, Any], key: str, rejected: List[str]) -> List[str]:
    value = settings.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        rejected.append(f"{key}: expected a list of strings, got {type(value).__name__}; ignored")
        return []
    out = []
    for item in value:
        if isinstance(item, str):
            out.append(item)
        else:
            rejected.append(f"{key}: ignored non-string entry {item!r}")
    return out


def engine_config_from_settings(settings: Dict[str, Any]) -> EngineConfig:
    """
    Build an EngineConfig from a settings dict as returned by load_config().
    Never raises on bad values: they fall back to defaults and show up in
    EngineConfig.validate(), which the engine logs once at construction.
    """
    rejected: List[str] = []
    symbols = settings.get("symbol_charset", DEFAULT_SYMBOLS)
    if not isinstance(symbols, str):
        rejected.append(f"symbol_charset: expected a string, got {type(symbols).__name__}; using default")
        symbols = DEFAULT_SYMBOLS
    extra = _setting_strings(settings, "extra_common_passwords", rejected)
    return EngineConfig(
        guess_rate=_setting_number(settings, "guess_rate", DEFAULT_GUESS_RATE, float, rejected),
        common_passwords=COMMON_PASSWORDS | frozenset(extra),
        symbol_charset=symbols,
        max_input_length=_setting_number(settings, "max_input_length", DEFAULT_MAX_INPUT_LENGTH, int, rejected),
        extra_sequences=tuple(_setting_strings(settings, "extra_sequences", rejected)),
        rejected_settings=tuple(rejected),
    )
