"""Directory model backing the file browser."""

from .directory import BrowserFrame, DirEntry, DirectoryModel, PARENT_NAME, canonicalize

__all__ = ["BrowserFrame", "DirEntry", "DirectoryModel", "PARENT_NAME", "canonicalize"]
