"""HTML parsing helpers for the color-scheme downloader."""
import os
import re
from typing import List, Optional, Tuple
from urllib.parse import unquote, urljoin, urlparse

from bs4 import BeautifulSoup

from utils.constants import IMAGE_EXTENSIONS, VIM_EXTENSION

_SCRIPT_ID_RE = re.compile(r'script_id=(\d+)')
_SRC_ID_RE = re.compile(r'download_script\.php\?src_id=(\d+)')


def parse_script_ids(html_content: str) -> List[str]:
    """Script ids linked from a vim.org search results page, in page order.

    Each result row links its script page more than once; duplicates are dropped.
    """
    soup = BeautifulSoup(html_content, 'html.parser')
    ids: List[str] = []
    seen = set()
    for a in soup.find_all('a', href=True):
        m = _SCRIPT_ID_RE.search(str(a.get('href')))
        if not m:
            continue
        script_id = m.group(1)
        if script_id in seen:
            continue
        seen.add(script_id)
        ids.append(script_id)
    return ids


def parse_download_links(html_content: str) -> List[Tuple[str, str]]:
    """(src_id, filename) pairs from a script page, newest upload first."""
    soup = BeautifulSoup(html_content, 'html.parser')
    links: List[Tuple[str, str]] = []
    for a in soup.find_all('a', href=True):
        m = _SRC_ID_RE.search(str(a.get('href')))
        if not m:
            continue
        name = a.get_text(strip=True)
        if not name:
            continue
        links.append((m.group(1), name))
    return links


def is_image(filename: str) -> bool:
    return os.path.splitext(filename)[1].lower() in IMAGE_EXTENSIONS


def choose_download(links: List[Tuple[str, str]]) -> Optional[Tuple[str, str]]:
    """Pick the newest upload that is not a screenshot."""
    for src_id, name in links:
        if is_image(name):
            continue
        return src_id, name
    return None


def parse_mirror_listing(html_content: str, base_url: str) -> List[Tuple[str, str]]:
    """(url, filename) for every `.vim` file in a mirror directory listing."""
    soup = BeautifulSoup(html_content, 'html.parser')
    entries: List[Tuple[str, str]] = []
    seen = set()
    for a in soup.find_all('a', href=True):
        href = str(a.get('href'))
        url = urljoin(base_url, href)
        name = os.path.basename(unquote(urlparse(url).path))
        if not name.endswith(VIM_EXTENSION) or name in seen:
            continue
        seen.add(name)
        entries.append((url, name))
    return entries
