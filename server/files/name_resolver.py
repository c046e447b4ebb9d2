"""
Name resolver module.

This module keeps the index of filenames the server knows about and hands out
collision-free names for incoming files.
"""

import os
import threading
from typing import Dict, Iterable, Optional

from common.constants import COPY_SUFFIX


def bare_filename(filename: str) -> str:
    """Return the filename with its final extension stripped."""
    return os.path.splitext(filename)[0]


def parse_copy_number(remainder: str, copy_suffix: str = COPY_SUFFIX) -> Optional[int]:
    """
    Extract the copy number from what is left of a sibling filename once the
    base name prefix has been removed, e.g. ``"_copy3.txt"`` -> ``3``.

    Returns None when the suffix is absent or not followed by digits only.
    """
    remainder = bare_filename(remainder)
    start = remainder.rfind(copy_suffix)
    if start == -1:
        return None

    digits = remainder[start + len(copy_suffix):]
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    return int(digits)


class NameResolver:
    """Registry of known filenames and their copy counters."""

    def __init__(self, index: Optional[Dict[str, int]] = None, copy_suffix: str = COPY_SUFFIX):
        self.index: Dict[str, int] = dict(index or {})  # filename -> highest copy number issued
        self.copy_suffix = copy_suffix
        self.lock = threading.Lock()  # Serializes resolve()

    @classmethod
    def from_names(cls, names: Iterable[str], copy_suffix: str = COPY_SUFFIX) -> 'NameResolver':
        """
        Build a resolver from a snapshot of existing filenames.

        Every name is recorded with the largest copy number found among its
        siblings, so the first collision continues after the copies already on
        disk.
        """
        names = set(names)
        index = {}

        for filename in names:
            latest_copy = 0
            base = bare_filename(filename)

            for sibling in names:
                if not sibling.startswith(base):
                    continue

                copy_num = parse_copy_number(sibling[len(base):], copy_suffix)
                if copy_num is not None and copy_num > latest_copy:
                    latest_copy = copy_num

            index[filename] = latest_copy

        return cls(index, copy_suffix)

    @classmethod
    def from_directory(cls, path: str = '.', copy_suffix: str = COPY_SUFFIX) -> 'NameResolver':
        """Build a resolver from the current listing of a directory."""
        return cls.from_names(os.listdir(path), copy_suffix)

    def resolve(self, requested: str) -> str:
        """
        Return a name under which ``requested`` can be stored.

        The requested name is returned unchanged when it is unknown. Otherwise
        a ``<base>_copy<n><ext>`` name is generated. Either way the returned
        name is reserved immediately, whether or not a file is ever written.
        """
        with self.lock:
            copy_num = self.index.get(requested)
            if copy_num is None:
                self.index[requested] = 0
                return requested

            base, ext = os.path.splitext(requested)
            while True:
                copy_num += 1
                candidate = f"{base}{self.copy_suffix}{copy_num}{ext}"
                # A client may have asked for this exact name earlier
                if candidate not in self.index:
                    break

            self.index[requested] = copy_num
            self.index[candidate] = 0
            return candidate

    def counter(self, filename: str) -> Optional[int]:
        """Get the stored copy counter for a filename, or None if unknown."""
        with self.lock:
            return self.index.get(filename)

    def __contains__(self, filename: str) -> bool:
        with self.lock:
            return filename in self.index

    def __len__(self) -> int:
        with self.lock:
            return len(self.index)
