"""
In-memory project file tree.

Files are keyed by absolute POSIX path ("/App.jsx"); directories are
implied by the files they contain. Useful for tests and for runs whose
state is shipped to and from a client as a snapshot.
"""

import posixpath

from agentrelay.domain.exceptions import ToolError


class ProjectError(ToolError):
    """A project operation could not be applied."""

    pass


class VirtualProject:
    """Simple in-memory file system."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self._files: dict[str, str] = {}
        for path, content in (files or {}).items():
            self._files[self._normalize(path)] = content

    @classmethod
    def from_snapshot(cls, snapshot: dict[str, str]) -> "VirtualProject":
        return cls(snapshot)

    def snapshot(self) -> dict[str, str]:
        return dict(sorted(self._files.items()))

    def list_paths(self) -> tuple[str, ...]:
        return tuple(sorted(self._files))

    def exists(self, path: str) -> bool:
        path = self._normalize(path)
        return path in self._files or self._is_dir(path)

    def read(self, path: str) -> str:
        path = self._normalize(path)
        if path not in self._files:
            raise ProjectError(f"File not found: {path}")
        return self._files[path]

    # -------------------------------------------------------------------------
    # Editing operations
    # -------------------------------------------------------------------------

    def view(self, path: str, view_range: list[int] | None = None) -> str:
        """
        Show a file with line numbers, or list a directory.

        Args:
            path: File or directory path
            view_range: Optional [start, end] 1-based line range; end -1
                means end of file
        """
        path = self._normalize(path)
        if path not in self._files:
            if self._is_dir(path):
                return "\n".join(self._children(path)) or "(empty directory)"
            raise ProjectError(f"File not found: {path}")

        lines = self._files[path].split("\n")
        start, end = 1, len(lines)
        if view_range:
            if len(view_range) != 2:
                raise ProjectError("view_range must be [start, end]")
            start = view_range[0]
            end = len(lines) if view_range[1] == -1 else view_range[1]
            if start < 1 or start > len(lines) or end < start:
                raise ProjectError(
                    f"Invalid view_range {view_range} for {path} "
                    f"({len(lines)} lines)"
                )
            end = min(end, len(lines))
        return "\n".join(f"{n}\t{lines[n - 1]}" for n in range(start, end + 1))

    def create(self, path: str, text: str = "") -> str:
        """Create or overwrite a file; parent directories are implicit."""
        path = self._normalize(path)
        if path == "/" or self._is_dir(path):
            raise ProjectError(f"Cannot create file at directory path: {path}")
        existed = path in self._files
        self._files[path] = text
        return f"File {'overwritten' if existed else 'created'}: {path}"

    def replace(self, path: str, old: str, new: str) -> str:
        """Replace the single occurrence of `old` in a file."""
        content = self.read(path)
        path = self._normalize(path)
        if not old:
            raise ProjectError("old_str must not be empty")
        count = content.count(old)
        if count == 0:
            raise ProjectError(f"old_str not found in {path}")
        if count > 1:
            raise ProjectError(
                f"old_str appears {count} times in {path}; make it unique"
            )
        self._files[path] = content.replace(old, new, 1)
        return f"Replaced text in {path}"

    def insert(self, path: str, line: int, text: str) -> str:
        """Insert `text` after line `line` (0 inserts at the top)."""
        content = self.read(path)
        path = self._normalize(path)
        lines = content.split("\n")
        if line < 0 or line > len(lines):
            raise ProjectError(
                f"insert_line {line} out of range for {path} ({len(lines)} lines)"
            )
        lines[line:line] = text.split("\n")
        self._files[path] = "\n".join(lines)
        return f"Inserted text at line {line} in {path}"

    def rename(self, old_path: str, new_path: str) -> str:
        """Move a file or directory; destination parents are implicit."""
        old_path = self._normalize(old_path)
        new_path = self._normalize(new_path)
        if not self.exists(old_path) or old_path == "/":
            raise ProjectError(f"Failed to rename {old_path}: path not found")
        if self.exists(new_path):
            raise ProjectError(f"Failed to rename {old_path}: {new_path} already exists")

        if old_path in self._files:
            self._files[new_path] = self._files.pop(old_path)
        else:
            prefix = old_path + "/"
            for path in [p for p in self._files if p.startswith(prefix)]:
                self._files[new_path + path[len(old_path) :]] = self._files.pop(path)
        return f"Successfully renamed {old_path} to {new_path}"

    def delete(self, path: str) -> str:
        """Delete a file or a whole directory."""
        path = self._normalize(path)
        if path == "/":
            raise ProjectError("Cannot delete the project root")
        if path in self._files:
            del self._files[path]
        elif self._is_dir(path):
            prefix = path + "/"
            for child in [p for p in self._files if p.startswith(prefix)]:
                del self._files[child]
        else:
            raise ProjectError(f"Failed to delete {path}: path not found")
        return f"Successfully deleted {path}"

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _normalize(self, path: str) -> str:
        if not path or not path.strip():
            raise ProjectError("Path must not be empty")
        normalized = posixpath.normpath("/" + path.strip().lstrip("/"))
        # normpath keeps a leading "//"
        return "/" + normalized.lstrip("/")

    def _is_dir(self, path: str) -> bool:
        if path == "/":
            return True
        prefix = path + "/"
        return any(p.startswith(prefix) for p in self._files)

    def _children(self, directory: str) -> list[str]:
        prefix = directory.rstrip("/") + "/"
        names = set()
        for path in self._files:
            if path.startswith(prefix):
                rest = path[len(prefix) :]
                head, sep, _ = rest.partition("/")
                names.add(head + "/" if sep else head)
        return sorted(names)
