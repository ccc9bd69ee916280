"""Archive extraction for downloaded color-scheme packages.

Every unpacker returns `(relative_path, data)` pairs for the regular files in
the archive; `candidate_files` then keeps only the `.vim` members that can be
color schemes.
"""
import gzip
import os
import re
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import List, Optional, Tuple

import py7zr
import rarfile

from utils.constants import ARCHIVE_SUFFIXES, NON_COLOR_DIRS, VIM_EXTENSION
from .errors import UnpackFailure, UnrecognizedArtifact

Member = Tuple[str, bytes]

_VIMBALL_ENTRY_RE = re.compile(r'^(.+?)\s*\[\[\[1\s*$')


def detect_format(filename: str) -> Optional[str]:
    """Archive format for `filename` based on its suffix, or None."""
    lower = filename.lower()
    for suffix, fmt in ARCHIVE_SUFFIXES:
        if lower.endswith(suffix):
            return fmt
    return None


def is_candidate(relative_path: str) -> bool:
    """True for `.vim` files at the root, in a `colors/` dir, or outside the standard runtime dirs."""
    path = relative_path.replace('\\', '/')
    while path.startswith('./'):
        path = path[2:]
    if not path.endswith(VIM_EXTENSION):
        return False
    parent = os.path.dirname(path)
    if parent in ('', '.'):
        return True
    parent_name = os.path.basename(parent)
    if parent_name == 'colors':
        return True
    return parent_name not in NON_COLOR_DIRS


def candidate_files(members: List[Member]) -> List[Member]:
    return [(name, data) for name, data in members if is_candidate(name)]


def _unpack_zip(path: Path) -> List[Member]:
    members = []
    with zipfile.ZipFile(path, 'r') as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            members.append((info.filename, zf.read(info)))
    return members


def _unpack_rar(path: Path) -> List[Member]:
    members = []
    with rarfile.RarFile(str(path)) as rf:
        for info in rf.infolist():
            if info.is_dir():
                continue
            members.append((info.filename, rf.read(info)))
    return members


def _unpack_7z(path: Path) -> List[Member]:
    members = []
    with tempfile.TemporaryDirectory() as tmp:
        with py7zr.SevenZipFile(path, mode='r') as z:
            z.extractall(path=tmp)
        root = Path(tmp)
        for item in sorted(root.rglob('*')):
            if item.is_file():
                members.append((item.relative_to(root).as_posix(), item.read_bytes()))
    return members


def _unpack_tar(path: Path, mode: str) -> List[Member]:
    members = []
    with tarfile.open(path, mode) as tf:
        for info in tf.getmembers():
            if not info.isfile():
                continue
            f = tf.extractfile(info)
            if f is None:
                continue
            members.append((info.name, f.read()))
    return members


def _gunzip_name(path: Path) -> str:
    name = path.name
    return name[:-3] if name.lower().endswith('.gz') else name


def _unpack_gz(path: Path) -> List[Member]:
    with gzip.open(path, 'rb') as f:
        return [(_gunzip_name(path), f.read())]


def parse_vimball(data: bytes) -> List[Member]:
    """Split a vimball into its files.

    Layout after the `UseVimball` / `finish` preamble, repeated per file::

        colors/desert.vim	[[[1
        42
        <42 lines of content>
    """
    text = data.decode('latin-1')
    lines = text.splitlines()

    try:
        start = next(i for i, line in enumerate(lines) if line.strip() == 'finish') + 1
    except StopIteration:
        raise UnpackFailure('Not a vimball: missing "finish" preamble')
    if not any(line.strip() == 'UseVimball' for line in lines[:start]):
        raise UnpackFailure('Not a vimball: missing "UseVimball" preamble')

    members: List[Member] = []
    i = start
    while i < len(lines):
        m = _VIMBALL_ENTRY_RE.match(lines[i])
        if not m:
            i += 1
            continue
        name = m.group(1).strip().replace('\\', '/')
        try:
            count = int(lines[i + 1].strip())
        except (IndexError, ValueError):
            raise UnpackFailure(f'Corrupt vimball entry for {name}: missing line count')
        body = lines[i + 2:i + 2 + count]
        if len(body) < count:
            raise UnpackFailure(f'Corrupt vimball entry for {name}: expected {count} lines, found {len(body)}')
        members.append((name, ('\n'.join(body) + '\n').encode('latin-1')))
        i += 2 + count
    return members


def _unpack_vimball(path: Path, compressed: bool) -> List[Member]:
    if compressed:
        with gzip.open(path, 'rb') as f:
            data = f.read()
    else:
        data = path.read_bytes()
    return parse_vimball(data)


def unpack(path: Path, fmt: Optional[str] = None) -> List[Member]:
    """Extract every regular file of the archive at `path`.

    Raises UnrecognizedArtifact when the name matches no known format and
    UnpackFailure when the archive is corrupt or cannot be read.
    """
    path = Path(path)
    fmt = fmt or detect_format(path.name)
    if fmt is None:
        raise UnrecognizedArtifact(f"{path.name} matches no known archive or color-scheme pattern")
    try:
        if fmt == 'zip':
            return _unpack_zip(path)
        if fmt == 'rar':
            return _unpack_rar(path)
        if fmt == '7z':
            return _unpack_7z(path)
        if fmt == 'tar.gz':
            return _unpack_tar(path, 'r:gz')
        if fmt == 'tar.bz2':
            return _unpack_tar(path, 'r:bz2')
        if fmt == 'gz':
            return _unpack_gz(path)
        if fmt == 'vimball':
            return _unpack_vimball(path, compressed=False)
        if fmt == 'vimball.gz':
            return _unpack_vimball(path, compressed=True)
    except UnpackFailure:
        raise
    except (zipfile.BadZipFile, tarfile.TarError, rarfile.Error, py7zr.exceptions.ArchiveError,
            OSError, EOFError, ValueError) as e:
        raise UnpackFailure(f'Could not unpack {path.name} as {fmt}: {e}') from e

    raise UnpackFailure(f'Unsupported archive format for {path.name}: {fmt}')
