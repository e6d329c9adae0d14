"""Artifact delivery - copy to a directory, read contents, preview.

Pure filesystem I/O. No cache or config dependency.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from snip.config.constants import FOLDER_META_FILE, PREVIEW_MAX_FILES, PREVIEW_MAX_LINES
from snip.core.errors import DeliveryError
from snip.core.logging import get_logger
from snip.index.models import ArtifactRecord, ArtifactType

log = get_logger("files.ops")

_PREVIEW_RULE = "-" * 40


def resolve_target(target: str | Path) -> Path:
    """Expand ``~`` and anchor relative paths at the working directory."""
    path = Path(target).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def list_code_files(directory: Path) -> list[Path]:
    """All files under directory except folder metadata, sorted.

    Unreadable or missing directories yield an empty list.
    """
    try:
        files = [
            p for p in directory.rglob("*") if p.is_file() and p.name != FOLDER_META_FILE
        ]
    except OSError as e:
        log.debug("list_failed", path=str(directory), error=str(e))
        return []
    return sorted(files)


def copy_to_directory(item: ArtifactRecord, target: str | Path) -> Path:
    """Copy an artifact under target and return what was written.

    Snippets copy their single file. Folder artifacts copy the whole tree
    to ``<target>/<name>`` without the metadata file.
    """
    dest_root = resolve_target(target)
    try:
        dest_root.mkdir(parents=True, exist_ok=True)
        if item.type is ArtifactType.SNIPPET:
            assert item.file_path is not None
            dest = dest_root / item.file_path.name
            shutil.copy2(item.file_path, dest)
        else:
            dest = dest_root / item.name
            shutil.copytree(item.path, dest, dirs_exist_ok=True)
            (dest / FOLDER_META_FILE).unlink(missing_ok=True)
    except OSError as e:
        raise DeliveryError.copy_failed(item.name, str(dest_root), str(e)) from e

    log.info("artifact_copied", name=item.name, target=str(dest))
    return dest


def _read(path: Path, name: str) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise DeliveryError.read_failed(name, str(e)) from e


def read_contents(item: ArtifactRecord) -> str:
    """Text of an artifact.

    A folder artifact with several files is concatenated, each file preceded
    by a ``// <relative path>`` header line.
    """
    if item.type is ArtifactType.SNIPPET:
        assert item.file_path is not None
        return _read(item.file_path, item.name)

    files = list_code_files(item.path)
    if not files:
        raise DeliveryError.no_files(item.name)
    if len(files) == 1:
        return _read(files[0], item.name)

    chunks = []
    for file in files:
        rel = file.relative_to(item.path).as_posix()
        chunks.append(f"// {rel}\n{_read(file, item.name)}\n\n")
    return "".join(chunks).strip()


def preview(
    item: ArtifactRecord,
    max_lines: int = PREVIEW_MAX_LINES,
    max_files: int = PREVIEW_MAX_FILES,
) -> str:
    """Short plain-text preview for pickers. Never raises."""
    header: list[str] = []
    if item.tags:
        header.append(f"Tags: {', '.join(item.tags)}")
    if item.metadata and item.metadata.example:
        header.append(f"Example: {item.metadata.example}")
    if header:
        header.append(_PREVIEW_RULE)

    body: list[str] = []
    if item.type is ArtifactType.SNIPPET:
        assert item.file_path is not None
        try:
            lines = item.file_path.read_text(encoding="utf-8", errors="replace").split("\n")
        except OSError as e:
            return f"Error generating preview: {e}"
        body.extend(lines[:max_lines])
        if len(lines) > max_lines:
            body.append("...")
    else:
        files = list_code_files(item.path)
        if not files:
            body.append("No code files found")
        else:
            body.extend(f"  {f.relative_to(item.path).as_posix()}" for f in files[:max_files])
            if len(files) > max_files:
                body.append(f"... and {len(files) - max_files} more files")

    return "\n".join(header + body)
