from __future__ import annotations

import re

from feature_env.env.filters import name_matches


def test_no_pattern_matches_everything() -> None:
    assert name_matches(None, "anything") is True
    assert name_matches(None, "") is True


def test_pattern_is_unanchored_search() -> None:
    # Matching follows re.search: a substring match is enough.
    assert name_matches("pod", "deployment/pod-ready") is True
    assert name_matches("^pod", "deployment/pod-ready") is False
    assert name_matches("ready$", "deployment/pod-ready") is True


def test_compiled_and_string_patterns_agree() -> None:
    compiled = re.compile(r"feat-\d+")
    for name in ["feat-1", "feat-x", "my feat-22"]:
        assert name_matches(compiled, name) == name_matches(r"feat-\d+", name)


def test_names_are_matched_literally() -> None:
    # The name is data, not a pattern.
    assert name_matches(r"a\.b", "a.b") is True
    assert name_matches(r"a\.b", "axb") is False
    assert name_matches("x", "a.*") is False
