"""
Utility helpers for path handling and console output.
"""

from projsync.utils.paths import is_dir, is_within, normalize_path, resolve_child

__all__ = ["is_dir", "is_within", "normalize_path", "resolve_child"]
