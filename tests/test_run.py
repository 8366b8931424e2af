import abacus
import arrows
from abacus import Position


def test_illegal_character_message():
    assert abacus.run('<stdin>', '2+@') == 'Illegal Character: @ File <stdin>, Line 1'


def test_leading_dot_message():
    assert abacus.run('<stdin>', '2+.5') == 'Illegal Character: . File <stdin>, Line 1'


def test_syntax_error_message():
    assert abacus.run('<stdin>', '2+3)') == \
        "Invalid Syntax: Expected '+', '-', '*' or '/' File <stdin>, Line 1"


def test_runtime_error_message():
    assert abacus.run('<stdin>', '5/0') == (
        'Traceback (most recent call last):\n'
        'File <stdin>, Line 1, <program>\n'
        'Runtime Error: Division by zero File <stdin>, Line 1'
    )


def test_error_report_underlines_span():
    _, error = abacus.execute('<stdin>', '2+@')
    assert error.as_report() == (
        'Illegal Character: @ File <stdin>, Line 1\n'
        '\n'
        '2+@\n'
        '  ^'
    )


def test_runtime_error_report_underlines_divisor():
    _, error = abacus.execute('<stdin>', '10 / (3-3)')
    report = error.as_report()
    assert report.startswith('Traceback (most recent call last):\n')
    assert report.endswith('10 / (3-3)\n      ^^^')


def test_arrow_text_spans_lines():
    text = '1\n2'
    start = Position(0, 0, 0, '<test>', text)
    end = Position(3, 1, 1, '<test>', text)
    assert arrows.arrow_text(text, start, end) == '1\n^\n2\n^'


def test_arrow_text_replaces_tabs():
    text = '\t1'
    start = Position(1, 0, 1, '<test>', text)
    end = Position(2, 0, 2, '<test>', text)
    assert arrows.arrow_text(text, start, end) == ' 1\n ^'


def test_run_is_repeatable():
    for text in ('2+3*4', '5/0', '2+@', '(1'):
        assert abacus.run('<stdin>', text) == abacus.run('<stdin>', text)


def test_debug_output(monkeypatch, capsys):
    monkeypatch.setattr(abacus, 'DEBUG', True)
    assert abacus.run('<stdin>', '1+2') == '3'
    out = capsys.readouterr().out
    assert 'DEBUG: TokenList: [INT:1, PLUS, INT:2, EOF]' in out
    assert 'DEBUG: AbstractSyntaxTree: (INT:1, PLUS, INT:2)' in out


def test_quiet_by_default(capsys):
    abacus.run('<stdin>', '1+2')
    assert capsys.readouterr().out == ''
