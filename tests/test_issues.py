"""
Unit tests for analytics/issues.py.

Each rule is tested in isolation, then the fold is tested for monotonic
escalation and savings arithmetic.
"""
import pytest

from context_analyzer.analytics.issues import (
    ISSUE_RULES,
    NO_ISSUES,
    NO_ISSUES_ACTION,
    SEVERITY_RANK,
    _rule_budget,
    _rule_circular,
    _rule_cohesion,
    _rule_depth,
    _rule_fragmentation,
    classify,
    escalate,
)
from context_analyzer.config import AnalyzerConfig

CONFIG = AnalyzerConfig()


def metrics(**overrides):
    base = {
        "file":                "src/a.ts",
        "import_depth":        0,
        "context_budget":      1000,
        "cohesion_score":      1.0,
        "fragmentation_score": 0.0,
        "circular_deps":       [],
    }
    base.update(overrides)
    return base


# ── individual rules ───────────────────────────────────────────────────────────

class TestRules:
    def test_circular(self):
        f = _rule_circular(metrics(circular_deps=[["a", "b"], ["a", "c"]]), CONFIG)
        assert f.min_severity == "critical"
        assert f.issue == "Part of 2 circular dependency chain(s)"
        assert f.savings_fraction == 0.2
        assert _rule_circular(metrics(), CONFIG) is None

    def test_depth_critical_above_one_and_half(self):
        f = _rule_depth(metrics(import_depth=8), AnalyzerConfig(max_depth=5))
        assert f.min_severity == "critical"
        assert f.issue == "Import depth 8 exceeds limit by 50%"
        assert f.savings_fraction == 0.3

    def test_depth_major(self):
        f = _rule_depth(metrics(import_depth=7), AnalyzerConfig(max_depth=5))
        assert f.min_severity == "major"
        assert f.issue == "Import depth 7 exceeds recommended maximum 5"
        assert f.savings_fraction == 0.15

    def test_depth_at_limit_ok(self):
        assert _rule_depth(metrics(import_depth=5), AnalyzerConfig(max_depth=5)) is None

    def test_budget_critical(self):
        f = _rule_budget(metrics(context_budget=15001), CONFIG)
        assert f.min_severity == "critical"
        assert f.issue == "Context budget 15,001 tokens is 50% over limit"
        assert f.savings_fraction == 0.4

    def test_budget_major(self):
        f = _rule_budget(metrics(context_budget=12000), CONFIG)
        assert f.min_severity == "major"
        assert f.issue == "Context budget 12,000 exceeds 10,000"
        assert f.savings_fraction == 0.2

    def test_budget_at_limit_ok(self):
        assert _rule_budget(metrics(context_budget=10000), CONFIG) is None

    def test_cohesion_very_low(self):
        f = _rule_cohesion(metrics(cohesion_score=0.25), CONFIG)
        assert f.min_severity == "major"
        assert f.issue == "Very low cohesion (25%) - mixed concerns"
        assert f.savings_fraction == 0.25

    def test_cohesion_low(self):
        f = _rule_cohesion(metrics(cohesion_score=0.5), CONFIG)
        assert f.min_severity == "minor"
        assert f.issue == "Low cohesion (50%)"
        assert f.savings_fraction == 0.1

    def test_fragmentation(self):
        f = _rule_fragmentation(metrics(fragmentation_score=0.75), CONFIG)
        assert f.min_severity == "minor"
        assert f.issue == "High fragmentation (75%) - scattered implementation"
        assert f.savings_fraction == 0.3
        assert _rule_fragmentation(metrics(fragmentation_score=0.5), CONFIG) is None


# ── classify ───────────────────────────────────────────────────────────────────

class TestClassify:
    def test_clean_file_is_info(self):
        out = classify(metrics(), CONFIG)
        assert out == {
            "severity":          "info",
            "issues":            [NO_ISSUES],
            "recommendations":   [NO_ISSUES_ACTION],
            "potential_savings": 0,
        }

    def test_depth_scenario(self):
        out = classify(metrics(import_depth=8), AnalyzerConfig(max_depth=5))
        assert out["severity"] == "critical"
        assert out["issues"] == ["Import depth 8 exceeds limit by 50%"]
        assert out["potential_savings"] == 300

    def test_minor_rule_never_lowers_critical(self):
        out = classify(
            metrics(circular_deps=[["src/a.ts", "b"]], fragmentation_score=0.9),
            CONFIG,
        )
        assert out["severity"] == "critical"
        assert len(out["issues"]) == 2

    def test_savings_summed_and_floored(self):
        # cycle 20% + low cohesion 10% + fragmentation 30% = 60% of 999
        out = classify(
            metrics(
                context_budget=999,
                circular_deps=[["x"]],
                cohesion_score=0.5,
                fragmentation_score=0.9,
            ),
            CONFIG,
        )
        assert out["potential_savings"] == 599

    def test_float_noise_does_not_lose_a_token(self):
        # 10% + 20% of 1000 must be exactly 300
        out = classify(metrics(context_budget=1000, cohesion_score=0.5), AnalyzerConfig(max_context_budget=999))
        assert out["potential_savings"] == 300

    def test_cycles_argument_filters_by_file(self):
        out = classify(metrics(), CONFIG, cycles=[["src/a.ts", "src/b.ts"], ["x", "y"]])
        assert out["severity"] == "critical"
        assert out["issues"] == ["Part of 1 circular dependency chain(s)"]

    def test_issues_follow_rule_order(self):
        out = classify(
            metrics(import_depth=6, cohesion_score=0.1, circular_deps=[["a"]]),
            CONFIG,
        )
        assert [i.split()[0] for i in out["issues"]] == ["Part", "Import", "Very"]
        assert len(out["recommendations"]) == 3


class TestMonotonicity:
    @pytest.mark.parametrize("current", list(SEVERITY_RANK))
    @pytest.mark.parametrize("minimum", list(SEVERITY_RANK))
    def test_escalate_never_lowers(self, current, minimum):
        result = escalate(current, minimum)
        assert SEVERITY_RANK[result] <= SEVERITY_RANK[current]
        assert SEVERITY_RANK[result] <= SEVERITY_RANK[minimum]

    def test_each_rule_prefix_only_raises(self):
        m = metrics(
            import_depth=6,
            context_budget=20000,
            cohesion_score=0.5,
            fragmentation_score=0.9,
            circular_deps=[["a"]],
        )
        severity = "info"
        for rule in ISSUE_RULES:
            finding = rule(m, CONFIG)
            if finding is None:
                continue
            nxt = escalate(severity, finding.min_severity)
            assert SEVERITY_RANK[nxt] <= SEVERITY_RANK[severity]
            severity = nxt
        assert severity == classify(m, CONFIG)["severity"] == "critical"
