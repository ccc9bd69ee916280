"""Run configuration for the color-scheme downloader.

Defaults can be overridden by an optional `vimcolors_config.json`::

    {
      "network": {"max_retries": 6, "retry_backoff": 1, "timeout": 30},
      "sources": {"runtime_mirror": "https://ftp.nluug.nl/pub/vim/runtime/colors/",
                  "compilations": ["https://github.com/flazz/vim-colorschemes/archive/refs/heads/master.zip"]},
      "limits": {"max_variants": 4},
      "files": {"skip": ["all_colors.rar", "_vimrc"], "rename": {"white.txt": "white.vim"}, "dos2unix": true}
    }

Command-line flags take precedence over the file, which takes precedence over
the defaults below. The result is frozen and handed to every component.
"""
import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

CONFIG_FILENAME = 'vimcolors_config.json'

SEARCH_URL = 'https://www.vim.org/scripts/script_search_results.php?&script_type=color%20scheme&show_me=1500'
SCRIPT_URL = 'https://www.vim.org/scripts/script.php?script_id={script_id}'
DOWNLOAD_URL = 'https://www.vim.org/scripts/download_script.php?src_id={src_id}'
RUNTIME_MIRROR = 'https://ftp.nluug.nl/pub/vim/runtime/colors/'
COMPILATIONS = ('https://github.com/flazz/vim-colorschemes/archive/refs/heads/master.zip',)

MAX_RETRIES = 6
RETRY_BACKOFF = 1
TIMEOUT = 30
MAX_VARIANTS = 4

# ChianRen's 2003 lyj--- collection is superseded by later uploads of every scheme in it.
SKIP_FILES = ('all_colors.rar', '_vimrc')
RENAME_FILES = (('oh-l_l_vim', 'oh-l_l.vim'), ('white.txt', 'white.vim'))

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloaderConfig:
    target_dir: Path
    log_file: Optional[Path] = None
    verbose: bool = False

    run_runtime: bool = True
    run_scripts: bool = True
    run_compilations: bool = True
    run_resolve: bool = True

    search_url: str = SEARCH_URL
    script_url: str = SCRIPT_URL
    download_url: str = DOWNLOAD_URL
    runtime_mirror: str = RUNTIME_MIRROR
    compilations: Tuple[str, ...] = COMPILATIONS

    max_retries: int = MAX_RETRIES
    retry_backoff: float = RETRY_BACKOFF
    timeout: float = TIMEOUT
    max_variants: int = MAX_VARIANTS

    skip_files: Tuple[str, ...] = SKIP_FILES
    rename_files: Tuple[Tuple[str, str], ...] = RENAME_FILES
    dos2unix: bool = True

    @property
    def staging_dir(self) -> Path:
        return self.target_dir / 'tmp'

    @property
    def renames(self) -> Dict[str, str]:
        return dict(self.rename_files)

    def with_overrides(self, **overrides: Any) -> 'DownloaderConfig':
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _read_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read config {path}: {e}; using defaults")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: top level is not an object")
        return {}
    return data


def load_config(target_dir: Path, config_path: Optional[Path] = None, **overrides: Any) -> DownloaderConfig:
    """Build the immutable run configuration.

    Args:
        target_dir: Directory that receives the merged `.vim` files
        config_path: Optional JSON file; defaults to `vimcolors_config.json` in the cwd
        overrides: CLI-level values; None means "not given"
    """
    cfg = _read_json(Path(config_path) if config_path else Path.cwd() / CONFIG_FILENAME)
    net = cfg.get('network', {}) or {}
    sources = cfg.get('sources', {}) or {}
    limits = cfg.get('limits', {}) or {}
    files = cfg.get('files', {}) or {}

    values: Dict[str, Any] = {}
    if 'max_retries' in net:
        values['max_retries'] = int(net['max_retries'])
    if 'retry_backoff' in net:
        values['retry_backoff'] = float(net['retry_backoff'])
    if 'timeout' in net:
        values['timeout'] = float(net['timeout'])
    for key in ('search_url', 'script_url', 'download_url', 'runtime_mirror'):
        if sources.get(key):
            values[key] = str(sources[key])
    if 'compilations' in sources:
        values['compilations'] = tuple(str(u) for u in sources['compilations'] or [])
    if 'max_variants' in limits:
        values['max_variants'] = int(limits['max_variants'])
    if 'skip' in files:
        values['skip_files'] = tuple(str(n) for n in files['skip'] or [])
    if 'rename' in files:
        values['rename_files'] = tuple((str(k), str(v)) for k, v in (files['rename'] or {}).items())
    if 'dos2unix' in files:
        values['dos2unix'] = bool(files['dos2unix'])

    config = DownloaderConfig(target_dir=Path(target_dir).expanduser(), **values)
    return config.with_overrides(**overrides)
