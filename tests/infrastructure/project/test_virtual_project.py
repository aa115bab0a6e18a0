"""Tests for VirtualProject - the in-memory project file tree."""

import pytest

from agentrelay.infrastructure.project import ProjectError, VirtualProject


class TestVirtualProjectPaths:
    """Tests for path handling and queries."""

    def test_paths_are_normalized(self) -> None:
        """Relative and dotted paths map onto absolute keys."""
        project = VirtualProject({"components/../App.jsx": "x"})

        assert project.list_paths() == ("/App.jsx",)
        assert project.read("App.jsx") == "x"

    def test_directories_are_implied(self) -> None:
        """A directory exists while it contains files."""
        project = VirtualProject({"/src/a.js": "", "/src/lib/b.js": ""})

        assert project.exists("/src")
        assert project.exists("/src/lib")
        assert not project.exists("/lib")

    def test_empty_path_rejected(self) -> None:
        """Blank paths raise ProjectError."""
        with pytest.raises(ProjectError):
            VirtualProject().read("  ")

    def test_snapshot_is_sorted_copy(self) -> None:
        """snapshot() returns an independent sorted mapping."""
        project = VirtualProject({"/b.js": "b", "/a.js": "a"})

        snapshot = project.snapshot()
        snapshot["/c.js"] = "c"

        assert list(project.snapshot()) == ["/a.js", "/b.js"]


class TestVirtualProjectView:
    """Tests for view()."""

    def test_view_numbers_lines(self) -> None:
        """Files are shown with 1-based line numbers."""
        project = VirtualProject({"/a.js": "one\ntwo\nthree"})

        assert project.view("/a.js") == "1\tone\n2\ttwo\n3\tthree"

    def test_view_range(self) -> None:
        """view_range limits the lines; -1 means end of file."""
        project = VirtualProject({"/a.js": "one\ntwo\nthree"})

        assert project.view("/a.js", [2, -1]) == "2\ttwo\n3\tthree"

    def test_view_invalid_range(self) -> None:
        """Out-of-range starts are rejected."""
        project = VirtualProject({"/a.js": "one"})

        with pytest.raises(ProjectError, match="Invalid view_range"):
            project.view("/a.js", [5, 6])

    def test_view_directory_lists_children(self) -> None:
        """Viewing a directory lists files and subdirectories."""
        project = VirtualProject({"/App.jsx": "", "/components/Button.jsx": ""})

        assert project.view("/") == "App.jsx\ncomponents/"

    def test_view_missing(self) -> None:
        """Viewing a missing path raises."""
        with pytest.raises(ProjectError, match="File not found"):
            VirtualProject().view("/nope.js")


class TestVirtualProjectEdits:
    """Tests for create, replace and insert."""

    def test_create_then_overwrite(self) -> None:
        """create() is idempotent and reports overwrites."""
        project = VirtualProject()

        assert project.create("/a.js", "1") == "File created: /a.js"
        assert project.create("/a.js", "2") == "File overwritten: /a.js"
        assert project.read("/a.js") == "2"

    def test_create_over_directory_rejected(self) -> None:
        """A file cannot replace a directory."""
        project = VirtualProject({"/src/a.js": ""})

        with pytest.raises(ProjectError):
            project.create("/src", "x")

    def test_replace_unique(self) -> None:
        """replace() swaps a single occurrence."""
        project = VirtualProject({"/a.js": "let x = 1;"})

        project.replace("/a.js", "1", "2")

        assert project.read("/a.js") == "let x = 2;"

    def test_replace_ambiguous(self) -> None:
        """Repeated old text must be made unique."""
        project = VirtualProject({"/a.js": "a a"})

        with pytest.raises(ProjectError, match="2 times"):
            project.replace("/a.js", "a", "b")

    def test_replace_missing_text(self) -> None:
        """Absent old text is an error."""
        project = VirtualProject({"/a.js": "abc"})

        with pytest.raises(ProjectError, match="not found"):
            project.replace("/a.js", "xyz", "b")

    def test_insert_after_line(self) -> None:
        """insert() places text after the given line."""
        project = VirtualProject({"/a.js": "one\nthree"})

        project.insert("/a.js", 1, "two")

        assert project.read("/a.js") == "one\ntwo\nthree"

    def test_insert_out_of_range(self) -> None:
        """Lines past the end are rejected."""
        project = VirtualProject({"/a.js": "one"})

        with pytest.raises(ProjectError, match="out of range"):
            project.insert("/a.js", 3, "x")


class TestVirtualProjectFileManagement:
    """Tests for rename and delete."""

    def test_rename_file(self) -> None:
        """Files move to their new path."""
        project = VirtualProject({"/a.js": "a"})

        assert project.rename("/a.js", "/lib/b.js") == "Successfully renamed /a.js to /lib/b.js"
        assert project.list_paths() == ("/lib/b.js",)

    def test_rename_directory(self) -> None:
        """Renaming a directory moves everything beneath it."""
        project = VirtualProject({"/src/a.js": "a", "/src/x/b.js": "b"})

        project.rename("/src", "/lib")

        assert project.list_paths() == ("/lib/a.js", "/lib/x/b.js")

    def test_rename_missing(self) -> None:
        """A missing source path is reported."""
        with pytest.raises(ProjectError, match="path not found"):
            VirtualProject().rename("/a.js", "/b.js")

    def test_rename_onto_existing(self) -> None:
        """The destination must be free."""
        project = VirtualProject({"/a.js": "", "/b.js": ""})

        with pytest.raises(ProjectError, match="already exists"):
            project.rename("/a.js", "/b.js")

    def test_delete_directory(self) -> None:
        """Deleting a directory removes its files."""
        project = VirtualProject({"/src/a.js": "", "/App.jsx": ""})

        project.delete("/src")

        assert project.list_paths() == ("/App.jsx",)

    def test_delete_root_rejected(self) -> None:
        """The root cannot be deleted."""
        with pytest.raises(ProjectError):
            VirtualProject({"/a.js": ""}).delete("/")

    def test_delete_missing(self) -> None:
        """Deleting a missing path is an error."""
        with pytest.raises(ProjectError, match="path not found"):
            VirtualProject().delete("/a.js")
