#!/usr/bin/env python3
"""
Vim color-scheme downloader (canonical runner)

Downloads Vim color schemes from a Vim runtime mirror, from the vim.org script
pages, and from bundled compilations, and merges them into a single flat
directory (default `~/.vim/tmpcolors`).

Usage notes:
- Every source is fetched, unpacked and merged before the next one starts; the
  target directory is the only state kept between runs.
- When two files claim the same name, the header comments (maintainer, version,
  last change) decide whether they are the same scheme and which copy is
  stale. Unrelated schemes that share a name are kept side by side as
  `name_1.vim` .. `name_4.vim`.
- A final resolve pass re-checks every `name_1.vim` against `name.vim` and
  drops the obsolete copy. Disable it with `--no-resolve`.

Configuration note:
- An optional `vimcolors_config.json` (cwd, or `--config`) overrides network
  retries, source URLs, the variant limit and the skip/rename lists.
"""

import argparse
import logging
import os
import shutil
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

import requests

from colorscheme_lib.config import DownloaderConfig, load_config
from colorscheme_lib.errors import (
    FetchExhausted, MergeAmbiguous, MergeError, UnpackFailure, UnrecognizedArtifact,
)
from colorscheme_lib.fetch import fetch_with_retry, filename_from_response
from colorscheme_lib.merge import DUPLICATE, REPLACED, WRITTEN, VariantLocks, cleanup_variants, merge_file
from colorscheme_lib.parse import choose_download, parse_download_links, parse_mirror_listing, parse_script_ids
from colorscheme_lib.unpack import candidate_files, unpack
from utils.constants import VIM_EXTENSION
from utils.filenames import base_name_for, clean_script_filename, dos2unix

DEFAULT_TARGET_DIR = '~/.vim/tmpcolors'
LOG_FILENAME = 'vimcolors.log'


class ColorSchemeDownloader:
    """Fetch, unpack and merge color schemes into one directory"""

    def __init__(self, config: DownloaderConfig, session: Optional[requests.Session] = None):
        """
        Initialize the downloader

        Args:
            config: Immutable run configuration
            session: Optional HTTP session (a fresh requests.Session by default)
        """
        self.config = config
        self.target_dir = Path(config.target_dir)
        self.target_dir.mkdir(parents=True, exist_ok=True)
        self.session = session if session is not None else requests.Session()
        self.locks = VariantLocks()
        self.stats: Dict[str, int] = {
            WRITTEN: 0,
            REPLACED: 0,
            DUPLICATE: 0,
            'failed': 0,
            'removed': 0,
            'errors': 0,
        }

        log_path = Path(config.log_file) if config.log_file else self.target_dir / LOG_FILENAME
        self.logger = logging.getLogger(f'ColorSchemeDownloader:{self.target_dir}')
        # Avoid adding duplicate handlers when reusing the same logger
        if not self.logger.handlers:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(str(log_path), maxBytes=5 * 1024 * 1024, backupCount=3, encoding='utf-8')
            handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(message)s'))
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.DEBUG if config.verbose else logging.INFO)
        self.log_path = log_path

    def close(self):
        """Close logging handlers so the log file is not left locked."""
        for h in list(self.logger.handlers):
            h.close()
            self.logger.removeHandler(h)

    def _echo(self, msg: str):
        if self.config.verbose:
            print(msg)

    def _error(self, msg: str):
        self.stats['errors'] += 1
        self.logger.error(msg)
        self._echo(f"  ✗ {msg}")

    def _fetch(self, url: str):
        """Fetch with the configured retry budget; None when the budget is exhausted."""
        try:
            return fetch_with_retry(
                self.session, url,
                max_retries=self.config.max_retries,
                backoff=self.config.retry_backoff,
                timeout=self.config.timeout,
                logger=self.logger,
            )
        except FetchExhausted as e:
            self._error(str(e))
            return None

    # -- merging -----------------------------------------------------------

    def merge_candidate(self, filename: str, data: bytes) -> Optional[str]:
        """Merge one `.vim` file into the target directory; returns the merge action."""
        base_name = base_name_for(os.path.basename(filename))
        if base_name is None:
            self.logger.debug(f"Ignoring non-scheme file {filename}")
            return None
        if self.config.dos2unix:
            data = dos2unix(data)

        try:
            with self.locks.for_base(base_name):
                result = merge_file(data, base_name, self.target_dir,
                                    max_variants=self.config.max_variants, logger=self.logger)
        except MergeError as e:
            self.stats['failed'] += 1
            kind = 'ambiguous' if isinstance(e, MergeAmbiguous) else 'slots exhausted'
            self._error(f"Merge {kind} for {filename}: {e}")
            return None

        self.stats[result.action] += 1
        self._echo(f"  ✓ {filename} → {result.path.name} ({result.action})")
        return result.action

    def ingest_download(self, filename: str, data: bytes):
        """Route one downloaded file: merge it, unpack it, or park it for inspection."""
        if filename in self.config.skip_files:
            self.logger.info(f"Skipping {filename} (listed in skip files)")
            return
        filename = self.config.renames.get(filename, filename)

        if filename.endswith(VIM_EXTENSION):
            self.merge_candidate(filename, data)
            return

        staging = self.config.staging_dir
        staging.mkdir(parents=True, exist_ok=True)
        archive_path = staging / filename
        try:
            archive_path.write_bytes(data)
            members = unpack(archive_path)
        except UnrecognizedArtifact as e:
            dest = self.target_dir / filename
            if not dest.exists():
                dest.write_bytes(data)
            self._error(f"{e}; left in {self.target_dir} for manual inspection")
            return
        except UnpackFailure as e:
            self._error(f"Unpack failed for {filename}: {e}")
            return
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        candidates = candidate_files(members)
        self._echo(f"  📦 {filename}: {len(candidates)} color scheme(s) of {len(members)} file(s)")
        for name, member_data in candidates:
            self.merge_candidate(name, member_data)

    # -- stages ------------------------------------------------------------

    def download_runtime(self):
        """Merge every scheme shipped in the Vim runtime `colors/` directory."""
        mirror = self.config.runtime_mirror
        self._echo(f"\n📋 Runtime mirror: {mirror}")
        self.logger.info(f"Runtime stage: listing {mirror}")
        listing = self._fetch(mirror)
        if listing is None:
            return
        entries = parse_mirror_listing(listing.text, mirror)
        self.logger.info(f"Runtime stage: {len(entries)} scheme(s) listed")
        for url, name in entries:
            response = self._fetch(url)
            if response is None:
                continue
            self.ingest_download(name, response.content)

    def download_scripts(self):
        """Merge the newest upload of every color-scheme script on vim.org."""
        self._echo(f"\n📋 vim.org scripts: {self.config.search_url}")
        self.logger.info(f"Scripts stage: searching {self.config.search_url}")
        search = self._fetch(self.config.search_url)
        if search is None:
            return
        script_ids = parse_script_ids(search.text)
        self.logger.info(f"Scripts stage: {len(script_ids)} script id(s) found")

        for idx, script_id in enumerate(script_ids, 1):
            page = self._fetch(self.config.script_url.format(script_id=script_id))
            if page is None:
                continue
            chosen = choose_download(parse_download_links(page.text))
            if chosen is None:
                self.logger.warning(f"No downloadable file for script {script_id}")
                continue
            src_id, name = chosen
            filename = clean_script_filename(name)
            self._echo(f"[{idx}/{len(script_ids)}] script {script_id}: {filename}")
            response = self._fetch(self.config.download_url.format(src_id=src_id))
            if response is None:
                continue
            self.ingest_download(filename, response.content)

    def download_compilations(self):
        """Merge every scheme found in the configured compilation archives."""
        for url in self.config.compilations:
            self._echo(f"\n📋 Compilation: {url}")
            self.logger.info(f"Compilations stage: fetching {url}")
            response = self._fetch(url)
            if response is None:
                continue
            self.ingest_download(filename_from_response(response, url), response.content)

    def resolve_variants(self):
        """Drop every `_1` variant that turned out to be an older copy of its primary."""
        removed = cleanup_variants(self.target_dir, logger=self.logger)
        self.stats['removed'] += len(removed)
        for path in removed:
            self._echo(f"  🗑️  Removed obsolete {path.name}")

    def run(self) -> Dict[str, int]:
        """Run every enabled stage in order and return the counters."""
        start_time = datetime.now()
        self.logger.info(f"Run started; target directory {self.target_dir}")

        if self.config.run_runtime:
            self.download_runtime()
        if self.config.run_scripts:
            self.download_scripts()
        if self.config.run_compilations:
            self.download_compilations()
        if self.config.run_resolve:
            self.resolve_variants()

        duration = datetime.now() - start_time
        summary = (f"written={self.stats[WRITTEN]} replaced={self.stats[REPLACED]} "
                   f"duplicate={self.stats[DUPLICATE]} failed={self.stats['failed']} "
                   f"removed={self.stats['removed']} errors={self.stats['errors']}")
        self.logger.info(f"Run finished in {duration}: {summary}")

        print("=" * 80)
        print("DOWNLOAD COMPLETE!")
        print("=" * 80)
        print(f"Color schemes saved to: {self.target_dir}")
        print(f"Summary: {summary}")
        print(f"Time elapsed: {duration}")
        if self.stats['errors']:
            print(f"\n⚠️  {self.stats['errors']} error(s) occurred. Check {self.log_path} for details.")
        return dict(self.stats)


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with 2 on usage errors; this tool reports usage errors with 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(description="Download Vim color schemes and merge them into one directory, "
                                         "removing duplicate versions of the same scheme")
    parser.add_argument('--target-dir', '-t', default=DEFAULT_TARGET_DIR,
                        help=f'Directory that receives the color schemes (default: {DEFAULT_TARGET_DIR})')
    parser.add_argument('--log-file', '-o', help=f'Log file (default: <target-dir>/{LOG_FILENAME})')
    parser.add_argument('--verbose', '-v', action='store_true', help='Echo progress to stdout')
    parser.add_argument('--config', '-c', help='Path to vimcolors_config.json (default: ./vimcolors_config.json)')
    parser.add_argument('--no-runtime', action='store_true', help='Do not download the Vim runtime color schemes')
    parser.add_argument('--no-scripts', action='store_true', help='Do not download color-scheme scripts from vim.org')
    parser.add_argument('--no-compilations', action='store_true', help='Do not download the color-scheme compilations')
    parser.add_argument('--no-resolve', action='store_true', help='Skip the final pass that removes obsolete _1 variants')
    return parser


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    config = load_config(
        Path(args.target_dir).expanduser(),
        config_path=Path(args.config) if args.config else None,
        log_file=Path(args.log_file).expanduser() if args.log_file else None,
        verbose=args.verbose,
        run_runtime=not args.no_runtime,
        run_scripts=not args.no_scripts,
        run_compilations=not args.no_compilations,
        run_resolve=not args.no_resolve,
    )

    downloader = ColorSchemeDownloader(config)
    try:
        downloader.run()
    except KeyboardInterrupt:
        print("\n\n⏸️  Download interrupted by user.")
        print("   Files merged so far are kept. Run the script again to continue.")
    except Exception as e:
        downloader.logger.exception(f"Unexpected error: {e}")
        print(f"\n\n❌ Unexpected error: {e}")
    finally:
        downloader.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
