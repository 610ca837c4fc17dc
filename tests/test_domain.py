"""Tests for the domain layer."""

import pytest
import semver

from gitversioning.domain import (
    TagRef,
    VersionedCommit,
    VersionInfo,
    WorkingTreeStatus,
)


class TestTagRef:
    """Tests for TagRef domain object."""

    def test_short_name_strips_namespace(self):
        ref = TagRef(name="refs/tags/v1.0.0", target="abc")
        assert ref.short_name == "v1.0.0"
        assert str(ref) == "v1.0.0"

    def test_short_name_keeps_nested_names(self):
        ref = TagRef(name="refs/tags/release/1.2", target="abc")
        assert ref.short_name == "release/1.2"

    def test_short_name_without_namespace(self):
        ref = TagRef(name="v1.0.0", target="abc")
        assert ref.short_name == "v1.0.0"

    def test_hashable(self):
        refs = {TagRef("refs/tags/a", "1"), TagRef("refs/tags/a", "1")}
        assert len(refs) == 1


class TestVersionedCommit:
    """Tests for the winning tag value object."""

    def test_none_found_sentinel(self):
        result = VersionedCommit.none_found()
        assert result.commit is None
        assert result.tag is None
        assert result.raw == "0.0.0"
        assert result.version == semver.Version(0, 0, 0)
        assert not result.found

    def test_found(self):
        result = VersionedCommit("abc", "v1.0", "1.0", semver.Version(1, 0, 0))
        assert result.found


class TestVersionInfo:
    def test_to_dict(self):
        info = VersionInfo(version="1.0.0-SNAPSHOT", base_version="1.0.0",
                           tag="v1.0.0", commit="abc", dirty=True)
        assert info.to_dict() == {
            'version': "1.0.0-SNAPSHOT",
            'base_version': "1.0.0",
            'tag': "v1.0.0",
            'commit': "abc",
            'dirty': True,
        }


class TestWorkingTreeStatus:
    """Tests for porcelain status parsing."""

    def test_empty_output_is_clean(self):
        assert WorkingTreeStatus.from_porcelain(None).clean
        assert WorkingTreeStatus.from_porcelain("").clean

    def test_modified_in_work_tree(self):
        status = WorkingTreeStatus.from_porcelain(" M src/app.py\0")
        assert status.modified == {"src/app.py"}
        assert status.uncommitted == frozenset()
        assert not status.clean

    def test_untracked(self):
        status = WorkingTreeStatus.from_porcelain("?? notes.txt\0")
        assert status.untracked == {"notes.txt"}

    def test_ignored_entries_skipped(self):
        status = WorkingTreeStatus.from_porcelain("!! build/out.o\0")
        assert status.clean

    def test_staged_add_and_remove(self):
        status = WorkingTreeStatus.from_porcelain("A  new.py\0D  old.py\0")
        assert status.added == {"new.py"}
        assert status.removed == {"old.py"}
        assert status.uncommitted == {"new.py", "old.py"}

    def test_staged_and_modified_again(self):
        status = WorkingTreeStatus.from_porcelain("MM app.py\0")
        assert status.uncommitted == {"app.py"}
        assert status.modified == {"app.py"}

    def test_missing(self):
        status = WorkingTreeStatus.from_porcelain(" D gone.py\0")
        assert status.missing == {"gone.py"}

    def test_intent_to_add(self):
        status = WorkingTreeStatus.from_porcelain(" A core/new.py\0")
        assert status.added == {"core/new.py"}
        assert status.uncommitted == {"core/new.py"}
        assert status.touches("core")

    def test_conflicting(self):
        status = WorkingTreeStatus.from_porcelain("UU merge.py\0AA both.py\0")
        assert status.conflicting == {"merge.py", "both.py"}
        assert status.modified == frozenset()

    def test_rename_consumes_source_entry(self):
        status = WorkingTreeStatus.from_porcelain("R  lib/new.py\0lib/old.py\0 M other.py\0")
        assert status.added == {"lib/new.py"}
        assert status.removed == {"lib/old.py"}
        assert status.modified == {"other.py"}

    def test_paths_with_spaces(self):
        status = WorkingTreeStatus.from_porcelain("?? my file.txt\0")
        assert status.untracked == {"my file.txt"}

    @pytest.mark.parametrize("prefix,expected", [
        (None, ["README.md", "core/a.py", "core2/b.py"]),
        ("", ["README.md", "core/a.py", "core2/b.py"]),
        (".", ["README.md", "core/a.py", "core2/b.py"]),
        ("core", ["core/a.py"]),
        ("core/", ["core/a.py"]),
        ("docs", []),
    ])
    def test_paths_under(self, prefix, expected):
        status = WorkingTreeStatus.from_porcelain(" M README.md\0?? core/a.py\0A  core2/b.py\0")
        assert status.paths_under(prefix) == expected
        assert status.touches(prefix) == bool(expected)

    def test_to_dict_lists_all_categories(self):
        status = WorkingTreeStatus.from_porcelain("?? b\0?? a\0")
        d = status.to_dict()
        assert d['untracked'] == ["a", "b"]
        assert set(d) == {'modified', 'untracked', 'uncommitted', 'missing',
                          'conflicting', 'added', 'removed'}
