"""Tests for path suggestion."""

import os
import sys

import pytest

from magic_guard.recovery.paths import PathSuggester, SuggestionSet


def _touch(directory, *names: str) -> None:
    for name in names:
        (directory / name).write_text("")


class TestPathSuggester:
    """Test path suggestion functionality."""

    def test_suggest_transposed_name(self, tmp_path) -> None:
        """Test suggesting a file whose name has two letters swapped."""
        _touch(tmp_path, "build.py", "readme.md", "setup.cfg")
        suggester = PathSuggester()

        result = suggester.suggest("biuld.py", str(tmp_path))

        assert result.count >= 1
        assert result.best.candidate_path == os.path.join(str(tmp_path), "build.py")
        assert result.best.exists is True
        assert result.best.similarity_score == 1.0

    def test_low_scores_discarded(self, tmp_path) -> None:
        """Test that unrelated entries are not suggested."""
        _touch(tmp_path, "build.py", "readme.md")
        suggester = PathSuggester()

        result = suggester.suggest("qqqqqqqq", str(tmp_path))

        assert result.count == 0
        assert result.scanned == 2

    def test_sorted_descending(self, tmp_path) -> None:
        """Test suggestions are ordered by score."""
        _touch(tmp_path, "config.yaml", "conf.d", "configure", "constants.py", "notes")
        suggester = PathSuggester()

        result = suggester.suggest("config", str(tmp_path))
        scores = [s.similarity_score for s in result]

        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= s <= 1.0 for s in scores)

    def test_ties_keep_scan_order(self, tmp_path) -> None:
        """Test that equally scored entries keep enumeration order."""
        _touch(tmp_path, "abx", "aby", "abz")
        suggester = PathSuggester()

        result = suggester.suggest("abc", str(tmp_path))
        expected = [os.path.join(str(tmp_path), name) for name in os.listdir(tmp_path)]

        assert len({s.similarity_score for s in result}) == 1
        assert [s.candidate_path for s in result] == expected

    def test_capacity(self, tmp_path) -> None:
        """Test that at most 16 suggestions are kept and the rest recorded."""
        _touch(tmp_path, *(f"file{i:02d}" for i in range(20)))
        suggester = PathSuggester()

        result = suggester.suggest("file", str(tmp_path))

        assert result.count == 16
        assert result.dropped == 4
        assert result.truncated is True
        assert result.scanned == 20
        assert result.scan_truncated is False

    def test_scan_limit(self, tmp_path) -> None:
        """Test that only the first 32 entries are scanned."""
        _touch(tmp_path, *(f"entry{i:02d}" for i in range(40)))
        suggester = PathSuggester()

        result = suggester.suggest("entry", str(tmp_path))

        assert result.scanned == 32
        assert result.scan_truncated is True
        assert result.count == 16
        assert result.dropped == 16

    def test_missing_base_dir(self, tmp_path) -> None:
        """Test an unreadable base directory gives an empty set."""
        suggester = PathSuggester()

        result = suggester.suggest("build", str(tmp_path / "missing"))

        assert isinstance(result, SuggestionSet)
        assert result.count == 0
        assert result.best is None

    def test_missing_inputs(self, tmp_path) -> None:
        """Test missing inputs give an empty set."""
        suggester = PathSuggester()

        assert suggester.suggest(None, str(tmp_path)).count == 0
        assert suggester.suggest("build", None).count == 0

    def test_overlong_paths_skipped(self, tmp_path) -> None:
        """Test candidates with too long a full path are skipped, not truncated."""
        _touch(tmp_path, "ab", "abcdefgh")
        suggester = PathSuggester(max_path_length=len(str(tmp_path)) + 5)

        result = suggester.suggest("abc", str(tmp_path))

        assert [s.candidate_path for s in result] == [os.path.join(str(tmp_path), "ab")]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_dangling_symlink_not_existing(self, tmp_path) -> None:
        """Test that a broken symlink is suggested but marked missing."""
        os.symlink(tmp_path / "nowhere", tmp_path / "buildx")
        suggester = PathSuggester()

        result = suggester.suggest("build", str(tmp_path))

        assert result.count == 1
        assert result.best.exists is False

    def test_idempotent(self, tmp_path) -> None:
        """Test repeated scans give identical results."""
        _touch(tmp_path, "alpha", "alpine", "beta")
        suggester = PathSuggester()

        assert suggester.suggest("alpah", str(tmp_path)) == suggester.suggest("alpah", str(tmp_path))


class TestCommandLineReport:
    """Test suggestions for a whole command line."""

    def test_missing_tokens_get_sets(self, tmp_path) -> None:
        """Test that only missing, non-flag tokens are reported."""
        _touch(tmp_path, "config.yaml")
        suggester = PathSuggester()

        report = suggester.suggest_for_command_line(
            ["-v", "confg.yaml", "config.yaml", "missing/zzz"],
            str(tmp_path),
        )

        assert report.set_count == 2
        token, suggestions = report.sets[0]
        assert token == "confg.yaml"
        assert suggestions.best.candidate_path == os.path.join(str(tmp_path), "config.yaml")
        token, suggestions = report.sets[1]
        assert token == "missing/zzz"
        assert suggestions.count == 0
        assert report.truncated is False

    def test_absolute_token(self, tmp_path) -> None:
        """Test absolute tokens are matched in their own directory."""
        (tmp_path / "sub").mkdir()
        _touch(tmp_path / "sub", "data.csv")
        suggester = PathSuggester()

        report = suggester.suggest_for_command_line([str(tmp_path / "sub" / "dta.csv")], "/")

        assert report.set_count == 1
        assert report.sets[0][1].best.candidate_path == os.path.join(str(tmp_path / "sub"), "data.csv")

    def test_set_capacity(self, tmp_path) -> None:
        """Test that at most 8 sets are built."""
        suggester = PathSuggester()

        report = suggester.suggest_for_command_line([f"nope{i}" for i in range(10)], str(tmp_path))

        assert report.set_count == 8
        assert report.truncated is True
