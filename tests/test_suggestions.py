from passaudit.suggestions import ISSUE_MESSAGES, describe_issue, suggest_improvements
from passaudit.evaluator import Issue

def test_every_issue_has_a_message():
    for issue in Issue:
        assert describe_issue(issue)
    assert set(ISSUE_MESSAGES) == set(Issue)

def test_suggest_for_common_password():
    s = suggest_improvements("password")
    assert s["score"] == 20
    assert "common_password" in s["issues"]
    assert "Avoid common words and passwords." in s["suggestions"]
    # advice follows issue order
    assert s["suggestions"][0] == describe_issue(Issue.TOO_SHORT)

def test_examples_produced():
    s = suggest_improvements("weak")
    assert len(s["examples"]) == 1
    assert isinstance(s["examples"][0], str)
    assert s["examples"][0] != "weak"

def test_strong_password_gets_praise_only():
    s = suggest_improvements("X7f!9Lq@2Vb#tR4sYp")
    assert s["issues"] == ["sufficiently_strong"]
    assert s["examples"] == []
