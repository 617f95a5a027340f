import json
import logging

from passaudit.config import (
    COMMON_PASSWORDS,
    DEFAULTS,
    DEFAULT_SYMBOLS,
    EngineConfig,
    engine_config_from_settings,
    load_config,
    save_config,
)
from passaudit.evaluator import PasswordStrengthEngine

def test_defaults():
    cfg = EngineConfig()
    assert cfg.guess_rate == 1e11
    assert cfg.max_input_length == 1024
    # the symbol regex of the analyzer; charset size still counts symbols as 32
    assert set(DEFAULT_SYMBOLS) == set("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?")
    assert len(DEFAULT_SYMBOLS) == 30
    assert len(set(DEFAULT_SYMBOLS)) == 30
    assert {"password", "123456", "12345678", "qwerty", "abc123", "letmein", "123456789"} <= COMMON_PASSWORDS
    assert cfg.validate() == []

def test_deny_list_is_lowercased_and_extensible():
    cfg = EngineConfig(common_passwords=frozenset({"Hunter2"}))
    assert "hunter2" in cfg.common_passwords
    extended = cfg.with_common_passwords(["Acme"])
    assert extended.common_passwords == frozenset({"hunter2", "acme"})
    # receiver unchanged
    assert cfg.common_passwords == frozenset({"hunter2"})

def test_validate_reports_problems():
    warnings = EngineConfig(guess_rate=float("nan"), symbol_charset="", max_input_length=0).validate()
    assert len(warnings) == 3
    assert EngineConfig(max_input_length=-5).effective_max_input_length == 1024

def test_save_and_load_roundtrip(tmp_path):
    path = str(tmp_path / "sub" / "config.json")
    save_config({"guess_rate": 1e9, "extra_common_passwords": ["Acme"]}, path)
    cfg = load_config(path)
    assert cfg["guess_rate"] == 1e9
    # missing keys come from defaults
    assert cfg["max_input_length"] == DEFAULTS["max_input_length"]
    engine_cfg = engine_config_from_settings(cfg)
    assert engine_cfg.guess_rate == 1e9
    assert "acme" in engine_cfg.common_passwords
    assert "password" in engine_cfg.common_passwords

def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == DEFAULTS

def test_corrupt_file_gives_defaults(tmp_path, caplog):
    p = tmp_path / "config.json"
    p.write_text("{not json", encoding="utf-8")
    assert load_config(str(p)) == DEFAULTS
    assert "using defaults" in caplog.text
    p.write_text(json.dumps([1, 2]), encoding="utf-8")
    assert load_config(str(p)) == DEFAULTS

def test_env_override(tmp_path, monkeypatch):
    p = tmp_path / "custom.json"
    p.write_text(json.dumps({"max_input_length": 64}), encoding="utf-8")
    monkeypatch.setenv("PASSAUDIT_CONFIG", str(p))
    assert load_config()["max_input_length"] == 64

def test_string_sequences_setting_is_rejected():
    cfg = engine_config_from_settings({"extra_sequences": "cba"})
    assert cfg.extra_sequences == ()
    assert any("extra_sequences" in w for w in cfg.validate())
    # a lone 'a' must not count as a sequential run
    engine = PasswordStrengthEngine(cfg)
    assert not engine.classify("Zq9#Kx!2Lm$a").has_sequential_run

def test_short_and_non_string_sequences_are_dropped():
    cfg = engine_config_from_settings({"extra_sequences": ["CBA", "ab", 5, ""]})
    assert cfg.extra_sequences == ("cba",)
    assert len(cfg.validate()) == 3
    direct = EngineConfig(extra_sequences=("x", "qwe"))
    assert direct.extra_sequences == ("qwe",)
    assert len(direct.validate()) == 1

def test_string_deny_list_setting_is_rejected():
    cfg = engine_config_from_settings({"extra_common_passwords": "hunter2"})
    assert "h" not in cfg.common_passwords
    assert "password" in cfg.common_passwords
    assert any("extra_common_passwords" in w for w in cfg.validate())
    cfg = engine_config_from_settings({"extra_common_passwords": ["Hunter2", 7]})
    assert "hunter2" in cfg.common_passwords
    assert len(cfg.validate()) == 1

def test_bad_numbers_fall_back_to_defaults():
    cfg = engine_config_from_settings({"guess_rate": "fast", "max_input_length": "big", "symbol_charset": 42})
    assert cfg.guess_rate == 1e11
    assert cfg.max_input_length == 1024
    assert cfg.symbol_charset == DEFAULT_SYMBOLS
    warnings = cfg.validate()
    assert len(warnings) == 3
    assert any("guess_rate" in w for w in warnings)
    assert any("max_input_length" in w for w in warnings)
    cfg = engine_config_from_settings({"guess_rate": None, "max_input_length": True})
    assert cfg.guess_rate == 1e11
    assert cfg.max_input_length == 1024

def test_rejected_settings_logged_once_by_engine(caplog):
    cfg = engine_config_from_settings({"guess_rate": "fast", "extra_sequences": "cba"})
    with caplog.at_level(logging.WARNING, logger="passaudit.evaluator"):
        engine = PasswordStrengthEngine(cfg)
        engine.evaluate("Tr0ub4dor&3")
        engine.evaluate("password")
    assert len(caplog.records) == 2
    assert engine.evaluate("Tr0ub4dor&3").score == 85

def test_bad_settings_file_still_builds_engine(tmp_path):
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"guess_rate": "x", "extra_sequences": "abc", "max_input_length": [1]}), encoding="utf-8")
    engine = PasswordStrengthEngine(engine_config_from_settings(load_config(str(p))))
    assert len(engine.warnings) == 3
    # 12 chars, four classes, long bonus, no run penalty
    assert engine.evaluate("Zq9#Kx!2Lm$a").score == 95
