import pytest

from colorscheme_lib.headers import ColorSchemeFile
from colorscheme_lib.similarity import same_scheme


def scheme(*lines, name='test.vim'):
    return ColorSchemeFile.from_bytes(('\n'.join(lines) + '\n').encode('utf-8'), name=name)


def body(tag, count=12):
    return ['hi Group%s_%d guifg=#%06x' % (tag, i, i) for i in range(count)]


def test_identical_maintainers_are_same():
    a = scheme('" Maintainer: Foo Bar', *body('a'))
    b = scheme('" Maintainer: Foo Bar', *body('b'))
    assert same_scheme(a, b)


def test_long_maintainer_differing_only_in_last_token():
    a = scheme('" Maintainer: Jani Nurminen the Finn <old@example.org>', *body('a'))
    b = scheme('" Maintainer: Jani Nurminen the Finn <new@example.org>', *body('b'))
    assert same_scheme(a, b)


def test_same_last_token():
    a = scheme('" Maintainer: H. Fugal <hans@fugal.net>', *body('a'))
    b = scheme('" Author: Hans Fugal <hans@fugal.net>', *body('b'))
    assert same_scheme(a, b)


def test_same_second_token_with_three_or_more_tokens():
    a = scheme('" Maintainer: Hans Fugal <hans@fugal.net>', *body('a'))
    b = scheme('" Maintainer: Hans Fugal <hfugal@gmail.com>', *body('b'))
    assert same_scheme(a, b)


def test_short_maintainers_with_different_tokens_are_not_same():
    a = scheme('" Maintainer: Foo Bar', *body('a'))
    b = scheme('" Maintainer: Baz Qux', *body('b'))
    assert not same_scheme(a, b)


def test_one_missing_maintainer_falls_through_to_line_checks():
    a = scheme('" Maintainer: Foo Bar', *body('a'))
    b = scheme(*body('b'))
    assert not same_scheme(a, b)


def test_five_of_first_six_lines_equal():
    head = ['" Vim color file', 'hi clear', 'set background=dark', 'let g:colors_name = "x"', 'hi Normal guifg=#fff']
    a = scheme(*head, '" revision A', *body('a'))
    b = scheme(*head, '" revision B', *body('b'))
    assert same_scheme(a, b)


def test_four_of_first_six_lines_equal_is_not_enough():
    head = ['" Vim color file', 'hi clear', 'set background=dark', 'let g:colors_name = "x"']
    a = scheme(*head, '" revision A', '" a', *body('a'))
    b = scheme(*head, '" revision B', '" b', *body('b'))
    assert not same_scheme(a, b)


def test_short_files_do_not_match_on_missing_lines():
    assert not same_scheme(scheme('hi clear'), scheme('hi clear', 'set bg=dark'))


def test_last_ten_lines_equal():
    tail = body('tail', 10)
    a = scheme('" first A', '" second A', '" third A', *tail)
    b = scheme('" first B', '" second B', '" third B', *tail)
    assert same_scheme(a, b)


def test_nine_matching_tail_lines_are_not_enough():
    tail = body('tail', 9)
    a = scheme('" first A', '" second A', '" third A', 'hi A guifg=red', *tail)
    b = scheme('" first B', '" second B', '" third B', 'hi B guifg=red', *tail)
    assert not same_scheme(a, b)


def test_unrelated_files_without_maintainers_are_not_same():
    assert not same_scheme(scheme(*body('a')), scheme(*body('b')))


def test_same_scheme_is_reflexive():
    a = scheme('" Vim color file', *body('a'))
    assert same_scheme(a, a)


PAIRS = [
    ('" Maintainer: Foo Bar', '" Maintainer: Foo Bar'),
    ('" Maintainer: A B C D', '" Maintainer: A B C E'),
    ('" Maintainer: A B', '" Maintainer: X Y Z B'),
    ('" Maintainer: A B C', '" Maintainer: X B Y Z W'),
    ('" Maintainer: A B C D', '" Maintainer: A B C'),
    ('" Maintainer: Solo', '" Maintainer: Other One Two'),
    ('" Maintainer: Foo Bar', 'no maintainer here'),
]


@pytest.mark.parametrize("first, second", PAIRS)
def test_same_scheme_is_symmetric(first, second):
    a = scheme(first, *body('a'))
    b = scheme(second, *body('b'))
    assert same_scheme(a, b) == same_scheme(b, a)


def test_short_file_without_maintainer_matches_its_copy():
    text = b'hi clear\nlet g:colors_name = "x"\n'
    a = ColorSchemeFile.from_bytes(text, name='x.vim')
    b = ColorSchemeFile.from_bytes(text, name='x_1.vim')
    assert a.maintainer is None
    assert same_scheme(a, a)
    assert same_scheme(a, b)
