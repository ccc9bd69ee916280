"""Merge incoming scheme files into the flat target directory.

Each scheme name owns up to `MAX_VARIANTS + 1` physical slots::

    desert.vim, desert_1.vim, desert_2.vim, desert_3.vim, desert_4.vim

An incoming file walks those slots in order. At every occupied slot it is
either dropped (byte-identical), written over the occupant (same scheme and
the occupant is obsolete), or passed on to the next slot. The first free slot
takes it.
"""
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from utils.filenames import variant_name
from .errors import MergeAmbiguous, MergeSlotsExhausted
from .headers import ColorSchemeFile
from .resolve import resolve, should_delete
from .similarity import same_scheme

MAX_VARIANTS = 4

WRITTEN = 'written'
REPLACED = 'replaced'
DUPLICATE = 'duplicate'


@dataclass(frozen=True)
class MergeResult:
    action: str
    path: Path


def variant_paths(base_name: str, target_dir: Path, max_variants: int = MAX_VARIANTS) -> List[Path]:
    """Ordered slot paths for `base_name`: the primary first, then `_1` .. `_max_variants`."""
    target_dir = Path(target_dir)
    return [target_dir / variant_name(base_name, i) for i in range(max_variants + 1)]


def merge_file(incoming: bytes, base_name: str, target_dir: Path,
               max_variants: int = MAX_VARIANTS,
               logger: Optional[logging.Logger] = None) -> MergeResult:
    """Place `incoming` into the slot sequence for `base_name`.

    Returns a MergeResult describing what happened. Raises MergeAmbiguous or
    MergeSlotsExhausted when every slot is taken and none could be freed; in
    that case nothing on disk changes.
    """
    candidate = ColorSchemeFile.from_bytes(incoming, name=variant_name(base_name, 0))
    saw_same_scheme = False

    for path in variant_paths(base_name, target_dir, max_variants):
        if not path.exists():
            path.write_bytes(incoming)
            if logger:
                logger.info(f"Wrote {path.name}")
            return MergeResult(WRITTEN, path)

        existing_bytes = path.read_bytes()
        if existing_bytes == incoming:
            if logger:
                logger.debug(f"Identical to {path.name}; dropping incoming copy")
            return MergeResult(DUPLICATE, path)

        existing = ColorSchemeFile.from_bytes(existing_bytes, name=path.name, path=path)
        if not same_scheme(existing, candidate):
            continue

        saw_same_scheme = True
        if resolve(existing, candidate) is existing:
            path.write_bytes(incoming)
            if logger:
                logger.info(f"Replaced obsolete {path.name} (version={existing.version}, year={existing.year}, "
                            f"size={existing.size_bytes}) with incoming (version={candidate.version}, "
                            f"year={candidate.year}, size={candidate.size_bytes})")
            return MergeResult(REPLACED, path)

    if saw_same_scheme:
        raise MergeAmbiguous(base_name, f"Could not place {base_name}: same-scheme variants found but none is obsolete "
                                        f"and all {max_variants + 1} slots are taken; needs manual review")
    raise MergeSlotsExhausted(base_name, f"Could not place {base_name}: all {max_variants + 1} slots are taken")


def cleanup_variants(target_dir: Path, logger: Optional[logging.Logger] = None) -> List[Path]:
    """Delete every `<name>_1.vim` that is identical to, or an obsolete copy of, `<name>.vim`.

    Safe to run repeatedly. Returns the paths removed.
    """
    target_dir = Path(target_dir)
    removed: List[Path] = []

    for second in sorted(target_dir.glob('*_1.vim')):
        primary = target_dir / (second.name[:-len('_1.vim')] + '.vim')
        if not primary.is_file() or not second.is_file():
            continue

        if primary.read_bytes() == second.read_bytes():
            second.unlink()
            removed.append(second)
            if logger:
                logger.info(f"Removed {second.name}: identical to {primary.name}")
            continue

        a = ColorSchemeFile.from_path(primary)
        b = ColorSchemeFile.from_path(second)
        if should_delete(a, b) is b:
            second.unlink()
            removed.append(second)
            if logger:
                logger.info(f"Removed {second.name}: obsolete copy of {primary.name}")

    return removed


class VariantLocks:
    """One lock per base name; different names may be merged in parallel."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def for_base(self, base_name: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(base_name)
            if lock is None:
                lock = threading.Lock()
                self._locks[base_name] = lock
            return lock
