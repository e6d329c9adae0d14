"""Artifact delivery: copy, read and preview artifacts on disk."""

from snip.files.ops import (
    copy_to_directory,
    list_code_files,
    preview,
    read_contents,
    resolve_target,
)

__all__ = ["copy_to_directory", "list_code_files", "preview", "read_contents", "resolve_target"]
