"""Shared constants for the color-scheme downloader."""

VIM_EXTENSION = '.vim'

# Screenshots uploaded next to a scheme on vim.org; never a color scheme.
IMAGE_EXTENSIONS = ['.png', '.jpg', '.jpeg', '.gif', '.bmp']

# Standard Vim runtime subdirectories whose .vim files are not color schemes.
NON_COLOR_DIRS = {'syntax', 'autoload', 'plugin', 'after', 'indent', 'ftplugin'}

# Archive suffixes recognised in downloads, longest first so '.vba.gz' wins over '.gz'.
ARCHIVE_SUFFIXES = [
    ('.tar.gz', 'tar.gz'),
    ('.tar.bz2', 'tar.bz2'),
    ('.vba.gz', 'vimball.gz'),
    ('.vmb.gz', 'vimball.gz'),
    ('.tgz', 'tar.gz'),
    ('.tbz2', 'tar.bz2'),
    ('.tbz', 'tar.bz2'),
    ('.zip', 'zip'),
    ('.rar', 'rar'),
    ('.7z', '7z'),
    ('.vba', 'vimball'),
    ('.vmb', 'vimball'),
    ('.gz', 'gz'),
]

USER_AGENTS = [
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15',
    'Mozilla/5.0 (X11; Linux x86_64; rv:125.0) Gecko/20100101 Firefox/125.0',
    'Mozilla/5.0 (X11; Ubuntu; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36',
]
