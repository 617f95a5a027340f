"""
passaudit.generator
Secure password generator using Python's secrets module.
"""

from secrets import choice, SystemRandom
import string
from typing import List, Optional


DEFAULT_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
SIMILAR_CHARS = "il1Lo0O"
AMBIGUOUS_CHARS = "{}[]()/\\'\"~,;:.<>"
_sysrand = SystemRandom()


def _strip(pool: str, chars: str) -> str:
    return "".join(c for c in pool if c not in chars)


def generate(
    length: int = 16,
    use_upper: bool = True,
    use_lower: bool = True,
    use_digits: bool = True,
    use_symbols: bool = True,
    force_each: bool = True,
    symbols: Optional[str] = None,
    exclude_similar: bool = False,
    exclude_ambiguous: bool = False,
) -> str:
    """
    Generate a cryptographically secure password.

    exclude_similar drops look-alikes (il1Lo0O); exclude_ambiguous drops
    brackets, quotes and punctuation that are awkward to type or read.
    """
    if length <= 0:
        raise ValueError("length must be > 0")

    symbols = symbols or DEFAULT_SYMBOLS
    pools: List[str] = []
    if use_upper:
        pools.append(string.ascii_uppercase)
    if use_lower:
        pools.append(string.ascii_lowercase)
    if use_digits:
        pools.append(string.digits)
    if use_symbols:
        pools.append(symbols)
    if exclude_similar:
        pools = [_strip(p, SIMILAR_CHARS) for p in pools]
    if exclude_ambiguous:
        pools = [_strip(p, AMBIGUOUS_CHARS) for p in pools]
    pools = [p for p in pools if p]
    if not pools:
        raise ValueError("At least one character set must be enabled")

    password_chars = []
    if force_each:
        for p in pools:
            password_chars.append(choice(p))

    all_chars = "".join(pools)
    remaining = length - len(password_chars)
    if remaining < 0:
        raise ValueError("length too small for the requested character classes")

    for _ in range(remaining):
        password_chars.append(choice(all_chars))

    _sysrand.shuffle(password_chars)
    return "".join(password_chars)


def generate_many(count: int, **options) -> List[str]:
    if count <= 0:
        raise ValueError("count must be > 0")
    return [generate(**options) for _ in range(count)]
