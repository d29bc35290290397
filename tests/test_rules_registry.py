"""Contract gate: rule registry buckets and metadata stay consistent.

Every rule the checker can emit must be registered with metadata; the
buckets stay sorted, unique and disjoint.
"""

from __future__ import annotations

import pytest

from modifier_lint import rules as R
from modifier_lint.checker import check_chain


def test_registry_invariants_hold() -> None:
    R._assert_rule_registry_invariants()


def test_all_rules_have_metadata() -> None:
    assert set(R.RULES) == set(R.ALL_RULE_IDS)
    for rid, info in R.RULES.items():
        assert info.rule_id == rid
        assert info.title


def test_eight_public_rules() -> None:
    assert len(R.PUBLIC_RULE_IDS) == 8
    assert R.EXPERIMENTAL_RULE_IDS == []
    assert R.DEPRECATED_RULE_IDS == []


@pytest.mark.parametrize(
    "chain",
    [
        ["testTag", "size"],
        ["padding", "weight"],
        ["background", "clip"],
        ["clip", "shadow"],
        ["clickable", "clip"],
        ["background", "padding", "clickable"],
        ["size", "animateContentSize"],
        ["size", "size"],
    ],
)
def test_emitted_rules_are_registered_with_default_severity(chain: list[str]) -> None:
    violations = check_chain(chain)
    assert violations
    for v in violations:
        assert v.rule_id in R.PUBLIC_RULE_IDS
        assert v.severity == R.RULES[v.rule_id].severity


def test_unsorted_bucket_is_rejected(monkeypatch) -> None:
    monkeypatch.setattr(R, "PUBLIC_RULE_IDS", list(reversed(R.PUBLIC_RULE_IDS)))
    with pytest.raises(AssertionError, match="sorted"):
        R._assert_rule_registry_invariants()


def test_missing_metadata_is_rejected(monkeypatch) -> None:
    trimmed = dict(R.RULES)
    trimmed.pop(R.MOD_DUPLICATE_001)
    monkeypatch.setattr(R, "RULES", trimmed)
    with pytest.raises(AssertionError, match="RULES metadata"):
        R._assert_rule_registry_invariants()
