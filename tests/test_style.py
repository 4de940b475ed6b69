import io
import re

from termcolor import colored

from prologuepy.diagnostics import Diagnostic, Severity
from prologuepy.render import SEVERITY_STYLES, compose, style, supports_color

ANSI = re.compile(r"\x1b\[[0-9;]*m")


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def _diagnostic() -> Diagnostic:
    return Diagnostic.error("unknown identifier").source("fn main() {\n    retrun;\n}").span(16, 22).build()


def test_style_with_color_off_is_identity() -> None:
    block = compose(_diagnostic())

    for severity in Severity:
        styled = style(block, severity, False)

        assert styled is block
        assert styled.render(color=False) == block.text
        assert not styled.is_styled


def test_style_with_color_on_keeps_text_content() -> None:
    block = compose(_diagnostic())

    styled = style(block, Severity.ERROR, True)
    rendered = styled.render(color=True)

    assert styled.is_styled
    assert styled.text == block.text
    assert ANSI.sub("", rendered) == block.text
    assert rendered != block.text


def test_style_colors_label_and_markers_by_severity() -> None:
    error_style = SEVERITY_STYLES[Severity.ERROR]
    styled = style(compose(_diagnostic()), Severity.ERROR, True)

    lines = styled.render(color=True).splitlines()

    assert lines[0].startswith(colored("error", error_style.color, attrs=list(error_style.attrs), force_color=True))
    assert lines[-1].endswith(colored("^^^^^^", error_style.color, attrs=list(error_style.attrs), force_color=True))
    # the excerpt itself is never styled
    assert lines[3].endswith("\x1b[0m     retrun;")


def test_every_severity_has_a_style() -> None:
    assert set(SEVERITY_STYLES) == set(Severity)
    assert SEVERITY_STYLES[Severity.WARNING].color == "yellow"


def test_supports_color_environment_and_tty() -> None:
    assert supports_color(_Tty(), environ={})
    assert not supports_color(io.StringIO(), environ={})
    assert not supports_color(_Tty(), environ={"NO_COLOR": "1"})
    assert supports_color(io.StringIO(), environ={"FORCE_COLOR": "1"})
    assert not supports_color(_Tty(), environ={"TERM": "dumb"})


def test_supports_color_on_closed_stream() -> None:
    stream = io.StringIO()
    stream.close()

    assert not supports_color(stream, environ={})


def test_style_colors_each_label_by_its_own_kind() -> None:
    diagnostic = (
        Diagnostic.warning("variable does not need to be mutable")
        .source("    let mut x = 42;")
        .span(12, 13)
        .label(8, 12, text="remove this")
        .build()
    )
    warning_style = SEVERITY_STYLES[Severity.WARNING]
    help_style = SEVERITY_STYLES[Severity.HELP]

    underline_row = style(compose(diagnostic), Severity.WARNING, True).render(color=True).splitlines()[4]

    assert colored("----", help_style.color, attrs=list(help_style.attrs), force_color=True) in underline_row
    assert colored("^", warning_style.color, attrs=list(warning_style.attrs), force_color=True) in underline_row
    assert colored("remove this", help_style.color, attrs=list(help_style.attrs), force_color=True) in underline_row
