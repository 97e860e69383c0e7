"""Tests for console prompt primitives."""

from userinput.panel.console import END_PANEL_PROMPT, EndAction


class TestPrompt:
    def test_reads_line_without_newline(self, scripted_console):
        console = scripted_console("hello")
        assert console.prompt("Name ") == "hello"
        assert "Name " in console.console.file.getvalue()

    def test_empty_line_is_not_end_of_input(self, scripted_console):
        assert scripted_console("").prompt("x") == ""

    def test_end_of_input_returns_none(self, scripted_console):
        console = scripted_console()
        assert console.prompt("x") is None
        assert console.prompt_password("x") is None

    def test_println_does_not_interpret_markup(self, scripted_console):
        console = scripted_console()
        console.println("0  [x] [bold]Choice[/bold]")
        assert "[x] [bold]Choice[/bold]" in console.console.file.getvalue()


class TestPromptInt:
    def test_returns_value_in_range(self, scripted_console):
        assert scripted_console("2").prompt_int("pick", 0, 3, 0, -1) == 2

    def test_empty_answer_returns_default(self, scripted_console):
        assert scripted_console("").prompt_int("pick", 0, 3, 1, -1) == 1

    def test_out_of_range_default_reprompts(self, scripted_console):
        assert scripted_console("", "0").prompt_int("pick", 0, 3, -1, -1) == 0

    def test_garbage_and_out_of_range_reprompt(self, scripted_console):
        console = scripted_console("abc", "9", " 3 ")
        assert console.prompt_int("pick", 0, 3, 0, -1) == 3

    def test_end_of_input_returns_cancel(self, scripted_console):
        assert scripted_console("9").prompt_int("pick", 0, 3, 0, -1) == -1


class TestEndPanel:
    def test_actions(self, scripted_console):
        assert scripted_console("1").prompt_end_panel() is EndAction.CONTINUE
        assert scripted_console("2").prompt_end_panel() is EndAction.QUIT
        assert scripted_console("3").prompt_end_panel() is EndAction.REDISPLAY

    def test_empty_answer_continues(self, scripted_console):
        assert scripted_console("").prompt_end_panel() is EndAction.CONTINUE

    def test_end_of_input_quits(self, scripted_console):
        console = scripted_console()
        assert console.prompt_end_panel() is EndAction.QUIT
        assert END_PANEL_PROMPT in console.console.file.getvalue()
