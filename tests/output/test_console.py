"""Tests for the Rich console factory."""

from archmodel.output.console import create_console, get_output, style_for_kind


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_style_for_known_kind(self) -> None:
        assert style_for_kind("container") == "arch.kind.container"

    def test_style_for_unknown_kind(self) -> None:
        assert style_for_kind("spaceship") == ""
