from pathlib import Path

from colorscheme_lib.parse import (
    choose_download, is_image, parse_download_links, parse_mirror_listing, parse_script_ids,
)

FIXTURES = Path(__file__).parent / 'fixtures'


def test_parse_script_ids_unique_and_ordered():
    html = (FIXTURES / 'search_results.html').read_text(encoding='utf-8')
    assert parse_script_ids(html) == ['1492', '415', '10042']


def test_parse_script_ids_empty_page():
    assert parse_script_ids('<html><body>No results</body></html>') == []


def test_parse_download_links():
    html = (FIXTURES / 'script_page.html').read_text(encoding='utf-8')
    links = parse_download_links(html)
    assert links == [
        ('21030', 'zenburn-screenshot.png'),
        ('21029', 'Zen Burn.vim'),
        ('9882', 'zenburn.vim'),
    ]


def test_choose_download_skips_images():
    html = (FIXTURES / 'script_page.html').read_text(encoding='utf-8')
    assert choose_download(parse_download_links(html)) == ('21029', 'Zen Burn.vim')


def test_choose_download_only_images():
    assert choose_download([('1', 'shot.PNG'), ('2', 'shot.jpg')]) is None
    assert choose_download([]) is None


def test_is_image():
    assert is_image('preview.GIF')
    assert not is_image('desert.vim')
    assert not is_image('desert.tar.gz')


def test_parse_mirror_listing():
    html = (FIXTURES / 'mirror_listing.html').read_text(encoding='utf-8')
    base = 'https://ftp.example.org/pub/vim/runtime/colors/'
    assert parse_mirror_listing(html, base) == [
        (base + 'blue.vim', 'blue.vim'),
        (base + 'darkblue.vim', 'darkblue.vim'),
    ]
