"""
File system traversal: walk directories and collect lintable files.

Collects Go source files (.go), Go test files (_test.go) and protobuf
definitions (.proto), each tagged with its FileRole, while skipping version
control, vendored and testdata directories.

Typical usage:
    from pathlib import Path
    from gostyle.traversal import find_source_files

    inputs = find_source_files(Path("./feature"))

    # Custom ignore patterns
    inputs = find_source_files(Path("./feature"), ignore_dirs={"vendor", "gen"})
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Set

from gostyle.context import FileRole, SourceInput

logger = logging.getLogger(__name__)

# Default directories to ignore during traversal
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Third-party and fixture code the go tool itself skips
    "vendor",
    "testdata",
    "node_modules",
    # IDE and editor directories
    ".vscode",
    ".idea",
    # Cache directories
    "__pycache__",
    ".cache",
}


def is_go_file(path: Path) -> bool:
    """
    Check if a file is Go source (.go extension, tests included).

    Examples:
        >>> is_go_file(Path("main.go"))
        True
        >>> is_go_file(Path("main_test.go"))
        True
        >>> is_go_file(Path("api.proto"))
        False
    """
    return path.suffix == ".go"


def is_test_file(path: Path) -> bool:
    """
    Check if a file is a Go test file (_test.go suffix).

    Examples:
        >>> is_test_file(Path("bgp_test.go"))
        True
        >>> is_test_file(Path("bgp.go"))
        False
    """
    return path.name.endswith("_test.go")


def is_proto_file(path: Path) -> bool:
    return path.suffix == ".proto"


def classify(path: Path) -> Optional[FileRole]:
    """
    Return the role of a file from its name, or None if it is not lintable.

    Examples:
        >>> classify(Path("bgp_test.go"))
        <FileRole.TEST: 'test'>
        >>> classify(Path("bgp.go"))
        <FileRole.SOURCE: 'source'>
        >>> classify(Path("README.md")) is None
        True
    """
    if is_test_file(path):
        return FileRole.TEST
    if is_go_file(path):
        return FileRole.SOURCE
    if is_proto_file(path):
        return FileRole.SCHEMA
    return None


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """
    Check if a directory should be skipped (by name only, case-sensitive).

    Examples:
        >>> should_ignore_directory(Path("vendor"), {"vendor"})
        True
        >>> should_ignore_directory(Path("feature"), {"vendor"})
        False
    """
    return dir_path.name in ignore_dirs


def find_source_files(
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
    filter_fn: Optional[Callable[[Path], bool]] = None,
) -> list[SourceInput]:
    """
    Recursively find all lintable files in a directory tree.

    Args:
        root: Root directory to start traversal from.
        ignore_dirs: Set of directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        follow_symlinks: If True, follow symbolic links during traversal.
        filter_fn: Optional additional filter; only files for which it returns
                   True are included.

    Returns:
        SourceInput entries sorted by path for deterministic ordering.

    Raises:
        FileNotFoundError: If the root directory does not exist.
        NotADirectoryError: If root is not a directory.

    Notes:
        Permission errors on subdirectories are logged and skipped.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Root path is not a directory: %s", root)
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: follow_symlinks=%s, ignore_dirs=%s",
        follow_symlinks,
        ignore_dirs,
    )

    collected: list[SourceInput] = []

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", entry)
                    continue

                if entry.is_dir():
                    if should_ignore_directory(entry, ignore_dirs):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)

                elif entry.is_file():
                    role = classify(entry)
                    if role is None:
                        continue
                    if filter_fn is not None and not filter_fn(entry):
                        logger.debug("Filtered out by custom filter: %s", entry)
                        continue
                    logger.debug("Found %s file: %s", role.value, entry)
                    collected.append(SourceInput(entry, role))

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    _walk_directory(root)

    collected.sort(key=lambda item: item.path)

    logger.info(
        "Traversal complete: found %d file(s) in %s",
        len(collected),
        root,
    )
    return collected
