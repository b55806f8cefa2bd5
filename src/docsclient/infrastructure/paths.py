"""POSIX-flavored path arithmetic over plain strings.

Paths inside a document tree are manipulated as strings rather than
:class:`pathlib.Path` objects so the same code serves the disk, memory
and remote backends, and so the separator can be swapped in tests.
Nothing here touches the host file system.
"""

from __future__ import annotations

DEFAULT_SEPARATOR = "/"


class PathSystem:
    """String path operations with a configurable separator."""

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        if not separator:
            msg = "Path separator must not be empty"
            raise ValueError(msg)
        self._separator = separator

    @property
    def separator(self) -> str:
        return self._separator

    def _segments(self, path: str) -> list[str]:
        return [segment for segment in path.split(self._separator) if segment]

    def is_absolute(self, path: str) -> bool:
        return path.startswith(self._separator)

    def join(self, *parts: str) -> str:
        """Join non-empty *parts* and normalize; ``"."`` for no parts.

        The result is absolute when the first part is.
        """
        non_empty = [part for part in parts if part]
        if not non_empty:
            return "."
        joined = self._separator.join(non_empty)
        if parts and self.is_absolute(parts[0]) and not self.is_absolute(joined):
            joined = self._separator + joined
        return self.normalize(joined)

    def basename(self, path: str, ext: str | None = None) -> str:
        """Last segment, with *ext* stripped when it is a suffix."""
        filename = path.split(self._separator)[-1]
        if ext and filename.endswith(ext):
            return filename[: -len(ext)]
        return filename

    def dirname(self, path: str) -> str:
        """*path* minus its last segment.

        No separator gives ``"."``, and so does a root-only path: ``"/"``
        collapses to ``"."`` rather than staying ``"/"``.
        """
        segments = path.split(self._separator)
        if len(segments) <= 1:
            return "."
        segments.pop()
        return self._separator.join(segments) or "."

    def extname(self, path: str) -> str:
        """Suffix from the last ``.`` of the final segment; ``""`` for dotfiles."""
        filename = self.basename(path)
        dot = filename.rfind(".")
        if dot <= 0:
            return ""
        return filename[dot:]

    def relative(self, from_path: str, to_path: str) -> str:
        """Path leading from *from_path* to *to_path*; ``"."`` when identical."""
        from_segments = self._segments(self.normalize(from_path))
        to_segments = self._segments(self.normalize(to_path))

        common = 0
        for left, right in zip(from_segments, to_segments, strict=False):
            if left != right:
                break
            common += 1

        segments = [".."] * (len(from_segments) - common) + to_segments[common:]
        return self._separator.join(segments) if segments else "."

    def resolve(self, *parts: str) -> str:
        """Fold *parts* left to right; an absolute part resets the result."""
        resolved = ""
        for part in parts:
            if self.is_absolute(part):
                resolved = part
            elif part:
                resolved = self.join(resolved, part) if resolved else part
        return self.normalize(resolved) if resolved else "."

    def normalize(self, path: str) -> str:
        """Collapse ``.``, repeated separators and ``..`` against real segments.

        Leading ``..`` segments survive on relative paths and are dropped at
        an absolute root.
        """
        if not path:
            return "."
        absolute = self.is_absolute(path)
        normalized: list[str] = []
        for segment in self._segments(path):
            if segment == "..":
                if normalized and normalized[-1] != "..":
                    normalized.pop()
                elif not absolute:
                    normalized.append("..")
            elif segment != ".":
                normalized.append(segment)

        result = self._separator.join(normalized)
        if absolute:
            return self._separator + result
        return result or "."


class MockPathSystem(PathSystem):
    """Deterministic path system anchored at a synthetic working directory.

    ``resolve`` of relative input starts from *cwd* instead of the process
    working directory, so results do not depend on the host.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR, cwd: str | None = None) -> None:
        super().__init__(separator)
        self._cwd = cwd if cwd is not None else f"{separator}mock-cwd"

    @property
    def cwd(self) -> str:
        return self._cwd

    @classmethod
    def create_with_separator(cls, separator: str) -> MockPathSystem:
        return cls(separator=separator)

    def resolve(self, *parts: str) -> str:
        resolved = ""
        for part in reversed(parts):
            if not part:
                continue
            resolved = f"{part}{self._separator}{resolved}" if resolved else part
            if self.is_absolute(part):
                return self.normalize(resolved)
        if not resolved:
            return self.normalize(self._cwd)
        return self.normalize(f"{self._cwd}{self._separator}{resolved}")
