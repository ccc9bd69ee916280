import re
from typing import Optional

from .constants import VIM_EXTENSION


def clean_script_filename(filename: str) -> str:
    """Normalize a downloaded script filename: drop quotes and spaces, lowercase."""
    name = re.sub(r"[' ]", '', filename)
    return name.lower()


def variant_name(base_name: str, index: int) -> str:
    """Physical filename of variant `index` (0 is the primary) for `base_name`."""
    if index == 0:
        return f"{base_name}{VIM_EXTENSION}"
    return f"{base_name}_{index}{VIM_EXTENSION}"


def base_name_for(filename: str) -> Optional[str]:
    """Return the scheme stem of a `.vim` filename, or None for other files.

    Numbered variants are not folded back: `desert_1.vim` yields `desert_1`.
    """
    if not filename.endswith(VIM_EXTENSION):
        return None
    stem = filename[:-len(VIM_EXTENSION)]
    return stem or None


def dos2unix(data: bytes) -> bytes:
    """Convert CRLF (and stray CR) line endings to LF."""
    return data.replace(b'\r\n', b'\n').replace(b'\r', b'\n')
