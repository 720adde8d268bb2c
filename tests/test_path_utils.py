"""Tests for lockfile discovery."""

import pytest

from hulud_checker.utils.path_utils import PathFilter, find_lockfiles, is_lockfile, resolve_lockfiles


@pytest.fixture
def project(tmp_path):
    """Create a small monorepo with lockfiles in skipped and searched places."""
    files = [
        "package-lock.json",
        "other-lock.yaml",
        "README.md",
        "node_modules/dep/package-lock.json",
        ".hidden/yarn.lock",
        "dist/pnpm-lock.yaml",
        "apps/web/pnpm-lock.yaml",
        "apps/web/package.json",
    ]
    for relative in files:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{}")
    return tmp_path


class TestIsLockfile:
    """Test lockfile name recognition."""

    @pytest.mark.parametrize("name", [
        "package-lock.json",
        "npm-shrinkwrap.json",
        "PNPM-LOCK.YAML",
        "yarn.lock",
        "bun.lockb",
        "bun.lock",
        "custom-lock.yml",
        "package-lock_inf.json",
    ])
    def test_lockfiles(self, name):
        assert is_lockfile(name)

    @pytest.mark.parametrize("name", ["package.json", "lockfile.txt", "README.md", "locks"])
    def test_other_files(self, name):
        assert not is_lockfile(name)


class TestFindLockfiles:
    """Test the directory search."""

    def test_recursive_search(self, project):
        """Test ordering and skipped directories."""
        found = find_lockfiles(project)

        assert found == [
            project / "package-lock.json",
            project / "other-lock.yaml",
            project / "apps" / "web" / "pnpm-lock.yaml",
        ]

    def test_non_recursive_search(self, project):
        found = find_lockfiles(project, recursive=False)

        assert found == [project / "package-lock.json", project / "other-lock.yaml"]

    def test_ignore_patterns(self, project):
        found = find_lockfiles(project, ignore_patterns=["apps", "other-*"])

        assert found == [project / "package-lock.json"]

    def test_path_filter_skips_hidden_and_dependency_dirs(self, tmp_path):
        path_filter = PathFilter()

        assert not path_filter.should_descend(tmp_path / "node_modules")
        assert not path_filter.should_descend(tmp_path / ".git")
        assert not path_filter.should_descend(tmp_path / ".anything")
        assert path_filter.should_descend(tmp_path / "packages")

    def test_symlink_cycle_is_not_followed(self, project):
        """Test that a directory link back to an ancestor is skipped."""
        (project / "apps" / "web" / "loop").symlink_to(project / "apps", target_is_directory=True)

        found = find_lockfiles(project)

        assert found == [
            project / "package-lock.json",
            project / "other-lock.yaml",
            project / "apps" / "web" / "pnpm-lock.yaml",
        ]

    def test_symlinked_folder_is_not_scanned_twice(self, project):
        (project / "web-alias").symlink_to(project / "apps" / "web", target_is_directory=True)

        found = find_lockfiles(project)

        assert found.count(project / "apps" / "web" / "pnpm-lock.yaml") == 1
        assert len(found) == 3


class TestResolveLockfiles:
    """Test turning a command-line path into lockfiles."""

    def test_single_file(self, tmp_path):
        lockfile = tmp_path / "whatever.txt"
        lockfile.write_text("")

        assert resolve_lockfiles(lockfile) == [lockfile]

    def test_directory(self, project):
        assert len(resolve_lockfiles(project)) == 3

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resolve_lockfiles(tmp_path / "missing")

    def test_default_locks_directory(self, tmp_path, monkeypatch):
        """Test that ``./locks`` is searched without recursion."""
        locks = tmp_path / "locks"
        (locks / "nested").mkdir(parents=True)
        (locks / "yarn.lock").write_text("")
        (locks / "nested" / "package-lock.json").write_text("{}")
        monkeypatch.chdir(tmp_path)

        found = resolve_lockfiles()

        assert [path.name for path in found] == ["yarn.lock"]

    def test_default_locks_directory_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert resolve_lockfiles() == []
