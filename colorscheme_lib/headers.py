"""Metadata extraction from color-scheme header comments.

Vim color schemes carry a loose, informal header such as::

    " Vim color file
    " Maintainer:  Hans Fugal <hans@fugal.net>
    " Last Change: 2013 Mar 12
    " Version:     1.2

Nothing about it is standardised, so every field is looked up with a list of
labels tried in priority order, and a missing field is an ordinary outcome.
"""
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

HEAD_LINES = 10
TAIL_LINES = 10

_YEAR_RE = re.compile(r'(?<!\d)20\d\d(?!\d)')
_SHORT_VERSION_RE = re.compile(r'\sv(\d+\.\S*)')


@dataclass(frozen=True)
class SchemeMetadata:
    maintainer: Optional[str] = None
    version: Optional[str] = None
    year: Optional[str] = None


@dataclass(frozen=True)
class ColorSchemeFile:
    """Immutable view of a scheme file: its size plus first and last lines."""

    name: str
    size_bytes: int
    head_lines: Tuple[str, ...]
    tail_lines: Tuple[str, ...]
    path: Optional[Path] = field(default=None, compare=False)

    @classmethod
    def from_bytes(cls, data: bytes, name: str = '<incoming>', path: Optional[Path] = None) -> 'ColorSchemeFile':
        # latin-1 maps every byte, so line comparisons stay exact for any encoding
        lines = [line.decode('latin-1') for line in data.splitlines()]
        return cls(
            name=name,
            size_bytes=len(data),
            head_lines=tuple(lines[:HEAD_LINES]),
            tail_lines=tuple(lines[-TAIL_LINES:]),
            path=path,
        )

    @classmethod
    def from_path(cls, path: Path) -> 'ColorSchemeFile':
        path = Path(path)
        return cls.from_bytes(path.read_bytes(), name=path.name, path=path)

    @property
    def maintainer(self) -> Optional[str]:
        return extract_maintainer(self.head_lines)

    @property
    def version(self) -> Optional[str]:
        return extract_version(self.head_lines)

    @property
    def year(self) -> Optional[str]:
        return extract_year(self.head_lines)

    def metadata(self) -> SchemeMetadata:
        return extract(self)


def _first_match(lines: Sequence[str], extractors: List[Callable[[str], Optional[str]]]) -> Optional[str]:
    """Run each extractor over `lines` in turn; the first non-empty result wins."""
    for extractor in extractors:
        for line in lines:
            value = extractor(line)
            if value is None:
                continue
            value = value.strip()
            if value:
                return value
            # An empty value on the first matching line means this label gave nothing
            break
    return None


def _after_label(label: str) -> Callable[[str], Optional[str]]:
    def extractor(line: str) -> Optional[str]:
        if label not in line:
            return None
        # Text after the last occurrence of the label
        return line.rsplit(label, 1)[1]
    return extractor


def _after_word(word: str) -> Callable[[str], Optional[str]]:
    pattern = re.compile(re.escape(word) + r'\s*:?\s*(.*)$')

    def extractor(line: str) -> Optional[str]:
        m = pattern.search(line)
        return m.group(1) if m else None
    return extractor


def _first_token(extractor: Callable[[str], Optional[str]]) -> Callable[[str], Optional[str]]:
    def wrapped(line: str) -> Optional[str]:
        rest = extractor(line)
        if rest is None:
            return None
        tokens = rest.split()
        return tokens[0] if tokens else ''
    return wrapped


def _year_after(label: str) -> Callable[[str], Optional[str]]:
    def extractor(line: str) -> Optional[str]:
        if label not in line:
            return None
        years = _YEAR_RE.findall(line.split(label, 1)[1])
        # Greedy: the last year on the line is the most recent edit
        return years[-1] if years else ''
    return extractor


def _short_version(line: str) -> Optional[str]:
    m = _SHORT_VERSION_RE.search(line)
    return m.group(1) if m else None


def extract_maintainer(head_lines: Sequence[str]) -> Optional[str]:
    """Maintainer or author identity from the header, e.g. 'Hans Fugal <hans@fugal.net>'."""
    return _first_match(head_lines[:HEAD_LINES], [
        _after_label('Maintainer:'),
        _after_word('Author'),
        _after_word('author'),
    ])


def extract_year(head_lines: Sequence[str]) -> Optional[str]:
    return _first_match(head_lines[:HEAD_LINES], [
        _year_after('Last Change:'),
        _year_after('Last Modified:'),
    ])


def extract_version(head_lines: Sequence[str]) -> Optional[str]:
    return _first_match(head_lines[:HEAD_LINES], [
        _first_token(_after_label('Version:')),
        _first_token(_after_word('version')),
        _short_version,
    ])


def extract(scheme: ColorSchemeFile) -> SchemeMetadata:
    """Collect maintainer, version and year for `scheme` in one value."""
    return SchemeMetadata(
        maintainer=scheme.maintainer,
        version=scheme.version,
        year=scheme.year,
    )
