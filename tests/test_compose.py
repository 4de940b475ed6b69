from textwrap import dedent

from prologuepy.diagnostics import Diagnostic, Severity
from prologuepy.render import RenderOptions, compose, compose_group, render_diagnostic

RETRUN = "fn main() {\n    retrun;\n}"


def _retrun_error() -> Diagnostic:
    return Diagnostic.error("unknown identifier").source(RETRUN).span(16, 22).build()


def test_compose_renders_the_canonical_example() -> None:
    expected = dedent(
        """\
        error: unknown identifier
        --> <anonymous>:2:5
          |
        2 |     retrun;
          |     ^^^^^^
        """
    )

    assert compose(_retrun_error()).text == expected


def test_compose_uses_the_source_name() -> None:
    diagnostic = Diagnostic.warning("unused variable").source("let x = 1;", name="src/main.rs").span(4, 5).build()

    assert compose(diagnostic).lines_text() == [
        "warning: unused variable",
        "--> src/main.rs:1:5",
        "  |",
        "1 | let x = 1;",
        "  |     ^",
    ]


def test_compose_right_aligns_a_two_digit_gutter() -> None:
    text = "".join(f"line{n}\n" for n in range(1, 11))
    diagnostic = Diagnostic.error("e").source(text).span(48, 53).build()

    lines = compose(diagnostic, RenderOptions(context_after=1)).lines_text()

    assert lines == [
        "error: e",
        "--> <anonymous>:9:1",
        "   |",
        " 9 | line9",
        "   | ^^^^^",
        "10 | line10",
    ]
    assert lines[4].startswith("  " + " |")


def test_compose_underlines_every_line_of_a_multi_line_span() -> None:
    text = "let x = foo(\n    1,\n    2);\n"
    diagnostic = Diagnostic.error("bad call").source(text).span(8, 26).build()

    assert compose(diagnostic).text == dedent(
        """\
        error: bad call
        --> <anonymous>:1:9
          |
        1 | let x = foo(
          |         ^^^^
        2 |     1,
          | ^^^^^^
        3 |     2);
          | ^^^^^^
        """
    )


def test_compose_zero_width_span_has_one_marker() -> None:
    diagnostic = Diagnostic.error("expected `;`").source("let x = 1").span(9, 9).build()

    assert compose(diagnostic).lines_text()[-1] == "  |          ^"


def test_compose_empty_text_shows_placeholder() -> None:
    diagnostic = Diagnostic.error("empty input").source("").span(0, 0).build()

    assert compose(diagnostic).lines_text() == [
        "error: empty input",
        "--> <anonymous>:1:1",
        "  | <no source available>",
    ]


def test_compose_header_only() -> None:
    diagnostic = Diagnostic.warning("something happened").build()

    assert compose(diagnostic).text == "warning: something happened\n"


def test_compose_notes_follow_a_blank_frame_row() -> None:
    diagnostic = (
        Diagnostic.error("unknown identifier")
        .source(RETRUN)
        .span(16, 22)
        .help("did you mean `return`?")
        .note("identifiers are case sensitive")
        .build()
    )

    assert compose(diagnostic).lines_text()[-5:] == [
        "2 |     retrun;",
        "  |     ^^^^^^",
        "  |",
        "  = help: did you mean `return`?",
        "  = note: identifiers are case sensitive",
    ]


def test_compose_placeholder_is_followed_by_a_blank_frame_row() -> None:
    diagnostic = Diagnostic.error("empty input").source("").span(0, 0).note("nothing to show").build()

    assert compose(diagnostic).lines_text() == [
        "error: empty input",
        "--> <anonymous>:1:1",
        "  | <no source available>",
        "  |",
        "  = note: nothing to show",
    ]


def test_compose_notes_without_source() -> None:
    diagnostic = Diagnostic.error("could not compile").help("rerun with --verbose").build()

    assert compose(diagnostic).lines_text() == [
        "error: could not compile",
        " = help: rerun with --verbose",
    ]


def test_compose_indents_continuation_lines() -> None:
    diagnostic = (
        Diagnostic.error("first line\nsecond line")
        .source(RETRUN)
        .span(16, 22)
        .note("first\nsecond")
        .build()
    )

    lines = compose(diagnostic).lines_text()

    assert lines[:2] == ["error: first line", "       second line"]
    assert lines[-2:] == ["  = note: first", "          second"]


def test_compose_marker_inside_a_crlf_terminator_matches_the_locator() -> None:
    diagnostic = Diagnostic.error("stray terminator").source("a\r\nb").span(2, 2).build()

    assert compose(diagnostic).lines_text() == [
        "error: stray terminator",
        "--> <anonymous>:1:3",
        "  |",
        "1 | a",
        "  |   ^",
    ]


def test_compose_context_and_tab_options() -> None:
    text = "a\n\tb\nc\n"
    diagnostic = Diagnostic.info("tabbed").source(text).span(3, 4).build()

    lines = compose(diagnostic, RenderOptions(context_before=1, context_after=1, tab_width=4)).lines_text()

    assert lines == [
        "info: tabbed",
        "--> <anonymous>:2:2",
        "  |",
        "1 | a",
        "2 |     b",
        "  |     ^",
        "3 | c",
    ]


def test_rendering_is_idempotent() -> None:
    diagnostic = _retrun_error()

    first = render_diagnostic(diagnostic, color_enabled=True)
    second = render_diagnostic(diagnostic, color_enabled=True)

    assert first == second
    assert first.render(color=True) == second.render(color=True)
    assert compose(diagnostic).text == compose(diagnostic).text


def test_compose_group_shares_one_gutter_width() -> None:
    twelve_lines = "".join(f"l{n}\n" for n in range(1, 13))
    warning = Diagnostic.warning("unused").source(twelve_lines, name="a.rs").span(35, 38).build()
    note = Diagnostic.note("defined here").source("#![warn(x)]", name="b.rs").span(3, 7).build()

    assert compose_group([warning, note]).text == dedent(
        """\
        warning: unused
        --> a.rs:12:1
           |
        12 | l12
           | ^^^
        note: defined here
        --> b.rs:1:4
           |
         1 | #![warn(x)]
           |    ^^^^
        """
    )


def test_compose_group_keeps_header_only_members_flush() -> None:
    located = _retrun_error()
    summary = Diagnostic.help("see the manual").note("chapter 3").build()

    lines = compose_group([located, summary]).lines_text()

    assert lines[-2:] == ["help: see the manual", " = note: chapter 3"]


def test_compose_hangs_a_help_label_beside_the_primary_marker() -> None:
    diagnostic = (
        Diagnostic.warning("variable does not need to be mutable")
        .source("    let mut x = 42;")
        .span(12, 13)
        .label(8, 12, text="help: remove this `mut`")
        .build()
    )

    assert compose(diagnostic).text == dedent(
        """\
        warning: variable does not need to be mutable
        --> <anonymous>:1:13
          |
        1 |     let mut x = 42;
          |         ----^
          |         |
          |         help: remove this `mut`
        """
    )


def test_compose_several_annotations_on_one_line() -> None:
    diagnostic = (
        Diagnostic.error("mismatched arguments")
        .source("let x = foo(a, b);")
        .span(8, 11)
        .primary_label("expected 1 argument")
        .label(12, 13, text="first", kind=Severity.NOTE)
        .label(15, 16, text="second", kind=Severity.NOTE)
        .build()
    )

    assert compose(diagnostic).lines_text()[3:] == [
        "1 | let x = foo(a, b);",
        "  |         ^^^ ^  ^ second",
        "  |         |   |",
        "  |         |   first",
        "  |         |",
        "  |         expected 1 argument",
    ]


def test_compose_primary_label_follows_its_markers() -> None:
    diagnostic = _retrun_error()
    labelled = Diagnostic.error("unknown identifier").source(RETRUN).span(16, 22).primary_label("not found").build()

    assert compose(labelled).lines_text()[-1] == "  |     ^^^^^^ not found"
    assert compose(diagnostic).lines_text()[-1] == "  |     ^^^^^^"


def test_compose_elides_lines_between_distant_annotations() -> None:
    text = "".join(f"l{n}\n" for n in range(1, 7))
    diagnostic = Diagnostic.error("e").source(text).span(0, 2).label(12, 14, text="used here").build()

    assert compose(diagnostic).lines_text() == [
        "error: e",
        "--> <anonymous>:1:1",
        "  |",
        "1 | l1",
        "  | ^^",
        "...",
        "5 | l5",
        "  | -- used here",
    ]


def test_compose_respects_the_help_marker_option() -> None:
    diagnostic = Diagnostic.error("e").source("abc").span(0, 1).label(2, 3, text="here").build()

    assert compose(diagnostic, RenderOptions(help_marker="~")).lines_text()[-1] == "  | ^ ~ here"
