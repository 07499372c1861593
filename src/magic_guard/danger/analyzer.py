"""Danger analysis for filesystem paths about to be operated on."""

from __future__ import annotations

import logging
import os
import stat
import sys
import time
from dataclasses import dataclass, field
from enum import IntEnum

logger = logging.getLogger(__name__)


class DangerLevel(IntEnum):
    """Ordered danger levels for filesystem operations."""

    NONE = 0  # Safe
    LOW = 1  # Mild (overwrites small file)
    MEDIUM = 2  # Questionable (move large tree)
    HIGH = 3  # Risky but reversible
    CRITICAL = 4  # Destructive (rm -r, wiping codebase)


CODE_EXTENSIONS = frozenset(ext.lower() for ext in (
    ".c", ".h", ".cpp", ".hpp", ".cc", ".cxx", ".hxx", ".hh",
    ".py", ".pyw", ".ipynb", ".pyc", ".pyo", ".pyd",
    ".java", ".class", ".jar", ".jad", ".jmod",
    ".cs", ".vb", ".fs",
    ".go", ".mod", ".sum",
    ".rs", ".rlib", ".toml",
    ".js", ".jsx", ".mjs", ".cjs",
    ".ts", ".tsx",
    ".php", ".phtml", ".php3", ".php4", ".php5", ".phps",
    ".rb", ".erb", ".rake", ".gemspec",
    ".pl", ".pm", ".pod", ".t",
    ".swift",
    ".kt", ".kts",
    ".scala", ".sc",
    ".sh", ".bash", ".zsh", ".csh", ".tcsh", ".ksh",
    ".bat", ".cmd", ".ps1", ".psm1",
    ".lua",
    ".sql", ".sqlite", ".db",
    ".html", ".htm", ".xhtml",
    ".css", ".scss", ".less",
    ".xml", ".xsd", ".xslt",
    ".json", ".yaml", ".yml",
    ".dart",
    ".groovy", ".gradle",
    ".r", ".rmd",
    ".m", ".mm",
    ".asm", ".s",
    ".v", ".vh", ".sv", ".vhd", ".vhdl",
    ".coffee",
    ".clj", ".cljs", ".cljc", ".edn",
    ".hs", ".lhs", ".ghc",
    ".ml", ".mli", ".ocaml",
    ".ada", ".adb", ".ads",
    ".for", ".f90", ".f95", ".f03", ".f08", ".f", ".f77",
    ".pro", ".tcl",
    ".tex", ".sty", ".cls",
    ".nim",
    ".cr",
    ".ex", ".exs",
    ".elm",
    ".erl", ".hrl",
    ".lisp", ".el", ".scm", ".cl", ".lsp",
    ".pas", ".pp", ".p",
    ".d",
    ".vala",
    ".vbs",
    ".awk",
    ".ps",
    ".raku", ".pl6", ".pm6",
    ".sol",
    ".cmake",
    ".build", ".options",
    ".dockerfile",
    ".ini", ".conf", ".cfg",
    ".sln", ".vcxproj", ".csproj",
    ".xcodeproj", ".xcworkspace",
    ".bazel", ".bzl",
    ".ninja",
    ".gitignore", ".gitattributes", ".editorconfig", ".env",
))

# Matched case-sensitively against the basename
CODE_FILENAMES = frozenset({
    "Makefile", "CMakeLists.txt", "Dockerfile", "BUILD", "WORKSPACE",
    "SConstruct", "Rakefile", "Gemfile",
})

SECRET_FILENAMES = (
    ".env", "secret.key", "id_rsa", "private.pem",
    "credentials.json", "config.yml", "secrets.yml",
)
SECRET_KEYWORDS = ("password", "secret")

DANGEROUS_EXTENSIONS = frozenset({
    ".exe", ".dll", ".bin", ".sh", ".bat", ".cmd",
    ".scr", ".pif", ".com", ".js", ".vbs",
})

VCS_MARKERS = (".git", ".svn", ".hg")

SIGNAL_WEIGHTS = {
    "contains_code": 3,
    "contains_secrets": 5,
    "large_size": 2,
    "world_writable": 2,
    "is_symlink": 1,
    "suspicious_extension": 2,
    "recently_modified": 1,
    "contains_suspicious_files": 2,
}


def level_for_score(score: int) -> DangerLevel:
    """Map a weighted signal score to a danger level."""
    if score >= 8:
        return DangerLevel.CRITICAL
    if score >= 5:
        return DangerLevel.HIGH
    if score >= 3:
        return DangerLevel.MEDIUM
    if score >= 1:
        return DangerLevel.LOW
    return DangerLevel.NONE


def extension_of(name: str) -> str | None:
    """Return the text of a basename from its last dot, lower-cased."""
    base = os.path.basename(name.rstrip("/\\")) or name
    dot = base.rfind(".")
    return base[dot:].lower() if dot >= 0 else None


def is_code_file(path: str) -> bool:
    ext = extension_of(path)
    if ext is not None and ext in CODE_EXTENSIONS:
        return True
    return os.path.basename(path) in CODE_FILENAMES


def is_dangerous_name(name: str) -> bool:
    ext = extension_of(name)
    return ext is not None and ext in DANGEROUS_EXTENSIONS


@dataclass
class DangerItem:
    """Danger analysis of a single path.

    Platform-dependent signals are None when they cannot be determined;
    unknown signals add nothing to the score and are listed in
    unknown_signals.
    """

    target_path: str = ""
    level: DangerLevel = DangerLevel.NONE
    score: int = 0

    is_directory: bool = False
    contains_code: bool = False
    contains_vcs: bool = False
    contains_secrets: bool = False
    large_size: bool = False
    writable: bool | None = False
    world_writable: bool | None = False
    is_symlink: bool | None = False
    suspicious_extension: bool = False
    recently_modified: bool | None = False
    contains_suspicious_files: bool = False

    size_bytes: int = 0
    size_walk_truncated: bool = False
    unknown_signals: tuple[str, ...] = field(default_factory=tuple)

    def signals(self) -> dict[str, bool | None]:
        """The weighted signals and their values."""
        return {name: getattr(self, name) for name in SIGNAL_WEIGHTS}

    def to_dict(self) -> dict:
        return {
            "target_path": self.target_path,
            "level": self.level.name,
            "score": self.score,
            "is_directory": self.is_directory,
            "contains_vcs": self.contains_vcs,
            "writable": self.writable,
            "size_bytes": self.size_bytes,
            "size_walk_truncated": self.size_walk_truncated,
            "unknown_signals": list(self.unknown_signals),
            **self.signals(),
        }


class DangerAnalyzer:
    """Inspects a path for signs that operating on it is risky."""

    def __init__(
        self,
        large_size_bytes: int = 10 * 1024 * 1024,
        recent_window_seconds: int = 24 * 3600,
        size_walk_max_depth: int = 64,
        clock=time.time,
    ) -> None:
        """Initialize danger analyzer.

        Args:
            large_size_bytes: Sizes above this count as large
            recent_window_seconds: Modification within this window counts as recent
            size_walk_max_depth: Deepest directory level the size walk descends to
            clock: Callable returning the current time in seconds
        """
        self.large_size_bytes = large_size_bytes
        self.recent_window_seconds = recent_window_seconds
        self.size_walk_max_depth = size_walk_max_depth
        self._clock = clock

    def analyze(self, path: str | None) -> DangerItem:
        """Analyze a single path.

        A path whose metadata cannot be read yields level NONE with every
        flag cleared.

        Args:
            path: Path to analyze

        Returns:
            Danger item with signals, score and level
        """
        item = DangerItem(target_path=path or "")
        if path is None:
            return item

        try:
            st = os.stat(path)
        except OSError as e:
            logger.debug(f"No metadata for {path}: {e}")
            return item

        unknown: list[str] = []
        item.is_directory = stat.S_ISDIR(st.st_mode)

        if sys.platform == "win32":
            item.writable = os.access(path, os.W_OK)
            item.world_writable = None
            unknown.append("world_writable")
        else:
            item.writable = bool(st.st_mode & stat.S_IWUSR)
            item.world_writable = bool(st.st_mode & stat.S_IWOTH)

        # stat() follows links, so ask lstat() separately
        item.is_symlink = os.path.islink(path)

        now = self._clock()
        item.recently_modified = (now - st.st_mtime) < self.recent_window_seconds

        if item.is_directory:
            item.contains_code = self._contains_git(path)
            item.contains_vcs = any(os.path.exists(os.path.join(path, m)) for m in VCS_MARKERS)
            item.contains_secrets = self._contains_secret(path)
            item.size_bytes, item.size_walk_truncated = self._directory_size(path)
            item.contains_suspicious_files = self._contains_suspicious_files(path)
        else:
            item.contains_code = is_code_file(path)
            item.size_bytes = st.st_size
            item.suspicious_extension = is_dangerous_name(path)

        item.large_size = item.size_bytes > self.large_size_bytes
        item.unknown_signals = tuple(unknown)
        item.score = sum(
            weight for name, weight in SIGNAL_WEIGHTS.items() if getattr(item, name)
        )
        item.level = level_for_score(item.score)

        logger.debug(f"Danger for {path}: {item.level.name} (score={item.score})")
        return item

    def _contains_git(self, path: str) -> bool:
        if os.path.isdir(os.path.join(path, ".git")):
            return True
        return os.path.exists(os.path.join(path, ".gitignore"))

    def _contains_secret(self, path: str) -> bool:
        for name in SECRET_FILENAMES:
            if os.path.exists(os.path.join(path, name)):
                return True

        try:
            names = os.listdir(path)
        except OSError:
            return False

        return any(
            keyword in name.lower() for name in names for keyword in SECRET_KEYWORDS
        )

    def _contains_suspicious_files(self, path: str) -> bool:
        try:
            names = os.listdir(path)
        except OSError:
            return False
        return any(is_dangerous_name(name) for name in names)

    def _directory_size(self, path: str) -> tuple[int, bool]:
        """Sum the sizes of all files below a directory.

        Symlinks are followed. Directories already visited (by device and
        inode) are not entered again, and the walk does not descend past
        size_walk_max_depth.

        Returns:
            Total size in bytes and whether the depth limit cut the walk short
        """
        total = 0
        truncated = False
        visited: set[tuple[int, int]] = set()

        try:
            root = os.stat(path)
        except OSError:
            return 0, False
        visited.add((root.st_dev, root.st_ino))

        stack = [(path, 0)]
        while stack:
            current, depth = stack.pop()
            try:
                names = os.listdir(current)
            except OSError:
                continue

            for name in names:
                full = os.path.join(current, name)
                try:
                    st = os.stat(full)
                except OSError:
                    continue

                if not stat.S_ISDIR(st.st_mode):
                    total += st.st_size
                    continue

                key = (st.st_dev, st.st_ino)
                if key in visited:
                    continue
                if depth + 1 > self.size_walk_max_depth:
                    truncated = True
                    continue
                visited.add(key)
                stack.append((full, depth + 1))

        if truncated:
            logger.warning(f"Size walk of {path} stopped at depth {self.size_walk_max_depth}")
        return total, truncated
