"""CLI utilities."""

from pathlib import Path


def document_label(path: Path, root: Path) -> str:
    """Display a document relative to ``root`` when it lives under it.

    Args:
        path: Absolute document path
        root: Run root directory

    Returns:
        A POSIX-style relative path, or the absolute path for outside documents
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)
