"""Tests for score normalisation and ranking."""

import math

import pytest

from punchtrunk.hotspots.ranking import CHANGED_FILE_BIAS, rank_hotspots, score_file


class TestScoreFile:
    def test_log_dampened_churn(self):
        assert score_file(10, 0.0) == pytest.approx(math.log(11))

    def test_bias_multiplies_exactly(self):
        assert score_file(7, 0.4, changed=True) == pytest.approx(score_file(7, 0.4) * 1.15)

    def test_negative_multiplier_flips_sign(self):
        assert score_file(10, -2.0) < 0
        # Biasing a negative score pushes it further down
        assert score_file(10, -2.0, changed=True) < score_file(10, -2.0)

    def test_zero_churn_scores_zero(self):
        assert score_file(0, 3.0) == 0.0


class TestRankHotspots:
    def test_equal_complexity_orders_by_churn(self):
        hs = rank_hotspots({"a.go": 10, "b.go": 1}, {"a.go": 2.0, "b.go": 2.0})
        assert [h.file for h in hs] == ["a.go", "b.go"]
        assert hs[0].score == pytest.approx(2.398, abs=1e-3)
        assert hs[1].score == pytest.approx(0.693, abs=1e-3)

    def test_bias_does_not_overturn_large_churn_gap(self):
        hs = rank_hotspots(
            {"a.go": 10, "b.go": 1},
            {"a.go": 2.0, "b.go": 2.0},
            changed={"b.go"},
        )
        assert [h.file for h in hs] == ["a.go", "b.go"]
        assert hs[1].score == pytest.approx(0.797, abs=1e-3)

    def test_bias_breaks_near_ties(self):
        hs = rank_hotspots({"a.go": 5, "b.go": 5}, {"a.go": 1.0, "b.go": 1.0}, changed={"b.go"})
        assert [h.file for h in hs] == ["b.go", "a.go"]

    def test_bias_is_exactly_one_fifteen(self):
        churn = {"a.go": 4, "b.go": 9, "c.go": 2}
        comp = {"a.go": 1.0, "b.go": 3.5, "c.go": 2.2}
        plain = {h.file: h.score for h in rank_hotspots(churn, comp)}
        biased = {h.file: h.score for h in rank_hotspots(churn, comp, changed={"b.go"})}
        assert biased["b.go"] == pytest.approx(plain["b.go"] * CHANGED_FILE_BIAS)
        assert biased["a.go"] == plain["a.go"]

    def test_z_scores_use_population_std(self):
        hs = rank_hotspots({"a": 1, "b": 1}, {"a": 1.0, "b": 3.0})
        by_file = {h.file: h for h in hs}
        # mean 2, population std 1 -> z = +1 / -1
        assert by_file["a"].score == pytest.approx(0.0)
        assert by_file["b"].score == pytest.approx(math.log(2) * 2)

    def test_single_file_has_zero_z(self):
        hs = rank_hotspots({"only.py": 3}, {"only.py": 9.0})
        assert hs[0].score == pytest.approx(math.log(4))

    def test_missing_files_dropped_but_still_normalised(self):
        churn = {"kept.py": 3, "gone.py": 50}
        comp = {"kept.py": 1.0, "gone.py": 3.0}
        hs = rank_hotspots(churn, comp, exists=lambda p: p != "gone.py")
        assert [h.file for h in hs] == ["kept.py"]
        # mean 2, std 1: kept.py sits at z = -1
        assert hs[0].score == pytest.approx(0.0)

    def test_sorted_non_increasing(self):
        churn = {f"f{i}.py": (i * 7) % 13 for i in range(40)}
        comp = {f"f{i}.py": (i * 3) % 5 + 0.5 for i in range(40)}
        hs = rank_hotspots(churn, comp, changed={"f3.py", "f9.py"})
        scores = [h.score for h in hs]
        assert all(scores[i] >= scores[i + 1] for i in range(len(scores) - 1))

    def test_ties_broken_by_path(self):
        hs = rank_hotspots({"b.py": 2, "a.py": 2, "c.py": 2}, {"a.py": 1.0, "b.py": 1.0, "c.py": 1.0})
        assert [h.file for h in hs] == ["a.py", "b.py", "c.py"]

    def test_truncates_to_top_500(self):
        churn = {f"f{i:04d}.py": i for i in range(750)}
        comp = {path: 1.0 for path in churn}
        hs = rank_hotspots(churn, comp)
        assert len(hs) == 500
        kept = {h.file for h in hs}
        assert kept == {f"f{i:04d}.py" for i in range(250, 750)}

    def test_custom_limit(self):
        hs = rank_hotspots({"a": 1, "b": 2, "c": 3}, {}, limit=2)
        assert [h.file for h in hs] == ["c", "b"]

    def test_missing_complexity_counts_as_zero(self):
        hs = rank_hotspots({"a": 1}, {})
        assert hs[0].complexity == 0.0

    def test_paths_forward_slashed(self):
        hs = rank_hotspots({"src\\win\\file.cs": 2}, {"src\\win\\file.cs": 1.0})
        assert hs[0].file == "src/win/file.cs"

    def test_empty_input(self):
        assert rank_hotspots({}, {}) == []

    def test_equal_non_dyadic_complexity_keeps_churn_order(self):
        churn = {"a.go": 10, "b.go": 1, "c.go": 1}
        complexity = {path: 0.1 for path in churn}
        ranked = rank_hotspots(churn, complexity)
        assert [h.file for h in ranked] == ["a.go", "b.go", "c.go"]
        assert ranked[0].score == pytest.approx(math.log(11))
        assert ranked[1].score == pytest.approx(math.log(2))

    def test_equal_complexity_from_token_density(self):
        # 7 tokens over 3 lines, a value with no exact binary form
        churn = {"x.py": 4, "y.py": 2}
        complexity = {"x.py": 7 / 3, "y.py": 7 / 3}
        scores = {h.file: h.score for h in rank_hotspots(churn, complexity)}
        assert scores == {"x.py": pytest.approx(math.log(5)), "y.py": pytest.approx(math.log(3))}
