"""Pytest configuration for vim-colorschemes downloader tests."""
import sys
from pathlib import Path

# Add the repository root to path so tests can import the runner and packages
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))
