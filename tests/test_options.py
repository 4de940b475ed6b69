import io

from prologuepy.render import ColorMode, RenderOptions


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_default_options() -> None:
    options = RenderOptions()

    assert options.context_before == 0
    assert options.context_after == 0
    assert options.tab_width == 1
    assert options.color is ColorMode.AUTO
    assert options.marker == "^"


def test_options_reject_invalid_values() -> None:
    for kwargs in ({"context_before": -1}, {"tab_width": 0}, {"marker": "^^"}):
        try:
            RenderOptions(**kwargs)
        except ValueError:
            pass
        else:
            raise AssertionError(f"expected ValueError for {kwargs}")


def test_options_from_env() -> None:
    options = RenderOptions.from_env(
        {"PROLOGUE_CONTEXT": "2", "PROLOGUE_TAB_WIDTH": "4", "PROLOGUE_COLOR": "Never"}
    )

    assert options.context_before == 2
    assert options.context_after == 2
    assert options.tab_width == 4
    assert options.color is ColorMode.NEVER
    assert RenderOptions.from_env({}) == RenderOptions()


def test_options_from_env_rejects_garbage() -> None:
    for environ in ({"PROLOGUE_CONTEXT": "many"}, {"PROLOGUE_COLOR": "sometimes"}):
        try:
            RenderOptions.from_env(environ)
        except ValueError:
            pass
        else:
            raise AssertionError(f"expected ValueError for {environ}")


def test_with_context() -> None:
    assert RenderOptions().with_context(2).context_after == 2
    assert RenderOptions().with_context(1, 3).context_after == 3


def test_resolve_color_for_each_mode() -> None:
    assert RenderOptions.for_mode(ColorMode.ALWAYS).resolve_color(io.StringIO())
    assert not RenderOptions.for_mode(ColorMode.NEVER).resolve_color(_Tty())
