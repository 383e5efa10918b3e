"""Tests for pattern matching and variable classification."""

from __future__ import annotations

import pytest

from sudo_env.env_filter import (
    EnvTables,
    PatternList,
    classify,
    classify_keep,
    is_exported_function,
    iter_entries,
    match,
    var_name,
    var_value,
)


class TestVarParts:
    def test_name_and_value(self):
        assert var_name("PATH=/usr/bin") == "PATH"
        assert var_value("PATH=/usr/bin") == "/usr/bin"

    def test_value_keeps_later_separators(self):
        assert var_value("OPTS=a=b") == "a=b"

    def test_no_separator(self):
        assert var_name("BROKEN") == "BROKEN"
        assert var_value("BROKEN") == ""


class TestMatch:
    def test_exact_match(self):
        assert match("IFS", "IFS= ")

    def test_exact_does_not_match_longer_name(self):
        assert not match("IFS", "IFSX=1")

    def test_exact_does_not_match_prefix_of_pattern(self):
        assert not match("LANGUAGE", "LANG=C")

    def test_exact_requires_separator(self):
        assert not match("IFS", "IFS")

    def test_wildcard_matches_prefix(self):
        assert match("LD_*", "LD_PRELOAD=/tmp/evil.so")
        assert match("LD_*", "LD_LIBRARY_PATH=/tmp")

    def test_wildcard_matches_bare_prefix(self):
        assert match("LC_*", "LC_=x")

    def test_wildcard_rejects_other_names(self):
        assert not match("LD_*", "OLD_PWD=/tmp")

    def test_wildcard_is_on_name_only(self):
        assert not match("PATHX*", "PATH=X")

    def test_lone_wildcard_matches_everything(self):
        assert match("*", "ANYTHING=1")


class TestExportedFunction:
    def test_bash_function(self):
        assert is_exported_function("foo=() { echo pwned; }")

    def test_marker_without_space(self):
        assert is_exported_function("foo=()")

    def test_marker_later_in_value(self):
        assert not is_exported_function("foo=x() { :; }")

    def test_plain_value(self):
        assert not is_exported_function("foo=bar")

    def test_no_separator(self):
        assert not is_exported_function("foo()")


class TestPatternList:
    def test_empty_pattern_rejected(self):
        with pytest.raises(ValueError, match="Invalid environment pattern"):
            PatternList.of("PATH", "")

    def test_separator_pattern_rejected(self):
        with pytest.raises(ValueError):
            PatternList.of("=x")

    def test_extended_returns_new_list(self):
        base = PatternList.of("IFS")
        more = base.extended("CDPATH", "LD_*")
        assert list(base) == ["IFS"]
        assert list(more) == ["IFS", "CDPATH", "LD_*"]
        assert len(more) == 3
        assert "LD_*" in more

    def test_matches_any(self):
        patterns = PatternList.of("IFS", "LD_*")
        assert patterns.matches("LD_AUDIT=x")
        assert patterns.matches("IFS=x")
        assert not patterns.matches("HOME=/root")

    def test_order_is_irrelevant(self):
        entries = ["IFS=x", "LD_AUDIT=x", "HOME=/", "LDX=1"]
        a = PatternList.of("IFS", "LD_*")
        b = PatternList.of("LD_*", "IFS")
        assert [a.matches(e) for e in entries] == [b.matches(e) for e in entries]

    def test_immutable(self):
        patterns = PatternList.of("IFS")
        with pytest.raises(AttributeError):
            patterns.patterns = ("PATH",)


class TestClassify:
    delete = PatternList.of("IFS", "LD_*")
    check = PatternList.of("LC_*", "LANG", "LANGUAGE")

    def test_accepts_unlisted(self):
        assert classify("EDITOR=vi", self.delete, self.check)

    def test_rejects_deleted(self):
        assert not classify("IFS=x", self.delete, self.check)

    def test_rejects_deleted_wildcard(self):
        assert not classify("LD_PRELOAD=/tmp/x.so", self.delete, self.check)

    def test_rejects_checked_with_slash(self):
        assert not classify("LC_ALL=/tmp/%n", self.delete, self.check)

    def test_rejects_checked_with_percent(self):
        assert not classify("LANG=%s", self.delete, self.check)

    def test_accepts_checked_without_special_chars(self):
        assert classify("LC_ALL=en_US.UTF-8", self.delete, self.check)

    def test_special_chars_only_matter_on_checked(self):
        assert classify("HOME=/home/me", self.delete, self.check)

    def test_rejects_exported_function(self):
        assert not classify("BASH_FUNC_x%%=() { :; }", PatternList(), PatternList())

    def test_empty_lists_accept(self):
        assert classify("IFS=x", PatternList(), PatternList())


class TestClassifyKeep:
    def test_kept(self):
        keep = PatternList.of("PATH", "XAUTH*")
        assert classify_keep("PATH=/bin", keep)
        assert classify_keep("XAUTHORITY=/home/me/.Xauthority", keep)

    def test_not_kept(self):
        assert not classify_keep("EDITOR=vi", PatternList.of("PATH"))


class TestEnvTables:
    def test_defaults_are_empty(self):
        tables = EnvTables()
        assert len(tables.delete) == 0
        assert len(tables.check) == 0
        assert len(tables.keep) == 0


class TestIterEntries:
    def test_none_source(self):
        assert list(iter_entries(None)) == []

    def test_stops_at_sentinel(self):
        assert list(iter_entries(["A=1", "B=2", None, "C=3"])) == ["A=1", "B=2"]

    def test_plain_list(self):
        assert list(iter_entries(["A=1"])) == ["A=1"]

    def test_mapping(self):
        assert list(iter_entries({"A": "1", "B": "x=y"})) == ["A=1", "B=x=y"]
