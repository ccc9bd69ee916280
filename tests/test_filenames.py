import pytest

from utils.filenames import base_name_for, clean_script_filename, dos2unix, variant_name


@pytest.mark.parametrize("orig, expected", [
    ("Zen Burn.vim", "zenburn.vim"),
    ("O'Neil's Dark.VIM", "oneilsdark.vim"),
    ("desert256.vim", "desert256.vim"),
    ("Solarized Colors.ZIP", "solarizedcolors.zip"),
])
def test_clean_script_filename(orig, expected):
    assert clean_script_filename(orig) == expected


def test_variant_name():
    assert variant_name('desert', 0) == 'desert.vim'
    assert variant_name('desert', 3) == 'desert_3.vim'


def test_base_name_for():
    assert base_name_for('desert.vim') == 'desert'
    assert base_name_for('desert_1.vim') == 'desert_1'
    assert base_name_for('README.txt') is None
    assert base_name_for('.vim') is None


def test_dos2unix():
    assert dos2unix(b'a\r\nb\rc\n') == b'a\nb\nc\n'
