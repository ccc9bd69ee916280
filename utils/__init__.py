# Utilities package for vim-colorschemes downloader
from .filenames import clean_script_filename, base_name_for, dos2unix, variant_name
from .constants import IMAGE_EXTENSIONS, NON_COLOR_DIRS, VIM_EXTENSION, USER_AGENTS

__all__ = [
    "clean_script_filename", "base_name_for", "dos2unix", "variant_name",
    "IMAGE_EXTENSIONS", "NON_COLOR_DIRS", "VIM_EXTENSION", "USER_AGENTS",
]
