"""Shared library for the Vim color-scheme downloader.

This package contains the pieces used by the downloader script:
- headers.py: metadata extraction from scheme header comments
- similarity.py / resolve.py: duplicate detection and obsolescence rules
- merge.py: variant-slot merge engine and final cleanup pass
- fetch.py / parse.py / unpack.py: network, HTML and archive helpers
- config.py: immutable run configuration
"""

# No exports needed - import directly from submodules
__all__ = []
