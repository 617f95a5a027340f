import pytest

from passaudit.generator import AMBIGUOUS_CHARS, DEFAULT_SYMBOLS, SIMILAR_CHARS, generate, generate_many

def test_length_and_classes():
    pw = generate(length=12)
    assert len(pw) == 12
    assert any(c.isupper() for c in pw)
    assert any(c.islower() for c in pw)
    assert any(c.isdigit() for c in pw)
    assert any(c in DEFAULT_SYMBOLS for c in pw)

def test_no_symbols():
    pw = generate(length=10, use_symbols=False)
    assert len(pw) == 10
    assert not any(c in DEFAULT_SYMBOLS for c in pw)

def test_too_short_raises():
    with pytest.raises(ValueError):
        generate(length=2, use_upper=True, use_lower=True, use_digits=True, use_symbols=True)

def test_nothing_enabled_raises():
    with pytest.raises(ValueError):
        generate(use_upper=False, use_lower=False, use_digits=False, use_symbols=False)

def test_exclude_similar_and_ambiguous():
    pw = generate(length=300, exclude_similar=True, exclude_ambiguous=True)
    assert len(pw) == 300
    assert not any(c in SIMILAR_CHARS for c in pw)
    assert not any(c in AMBIGUOUS_CHARS for c in pw)

def test_generate_many():
    pws = generate_many(5, length=20)
    assert len(pws) == 5
    assert all(len(p) == 20 for p in pws)
    # 20 random characters colliding would point to a broken RNG
    assert len(set(pws)) == 5
