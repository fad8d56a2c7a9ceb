from rich.text import Text

from ollama_manager.core.formatter import (
    PlainStyler,
    SegmentKind,
    SyntaxStyler,
    fence_language,
    format_response,
    segment,
)


def test_text_without_fences_is_unchanged():
    text = "Hello there!\n\nHere is a list:\n- one\n- two"
    rendered = format_response(text)
    assert rendered.plain == text
    assert rendered.spans == []


def test_single_line_reply_has_no_code_styling():
    rendered = format_response("Hi there!")
    assert rendered.plain == "Hi there!"
    assert rendered.spans == []


def test_fenced_block_lines_are_code_with_language():
    segments = segment("Run this:\n```bash\nls -la\npwd\n```\nDone.")
    assert [s.kind for s in segments] == [SegmentKind.PROSE, SegmentKind.CODE, SegmentKind.PROSE]
    assert segments[1].language == "bash"
    assert segments[1].lines == ("ls -la", "pwd")
    assert segments[0].text == "Run this:"
    assert segments[2].text == "Done."


def test_fence_lines_are_not_rendered():
    rendered = format_response("```python\nprint('hi')\n```")
    assert "```" not in rendered.plain
    assert "python" not in rendered.plain
    assert rendered.plain == "print('hi')"


def test_code_lines_get_styled():
    rendered = format_response("```python\nx = 1\n```")
    assert rendered.plain == "x = 1"
    assert rendered.spans


def test_bare_fence_defaults_to_plaintext():
    segments = segment("```\nsome output\n```")
    assert segments[0].kind is SegmentKind.CODE
    assert segments[0].language == "plaintext"


def test_closing_fence_resets_language():
    segments = segment("```go\nfmt.Println()\n```\n```\nplain\n```")
    assert [s.language for s in segments] == ["go", "plaintext"]


def test_unterminated_fence_keeps_rest_as_code():
    segments = segment("intro\n```js\nlet a = 1;\nlet b = 2;")
    assert segments[-1].kind is SegmentKind.CODE
    assert segments[-1].lines == ("let a = 1;", "let b = 2;")
    assert format_response("intro\n```js\nlet a = 1;\nlet b = 2;").plain == "intro\nlet a = 1;\nlet b = 2;"


def test_unknown_language_falls_back_to_plain_text():
    rendered = format_response("```definitely-not-a-language\nfoo bar\n```")
    assert rendered.plain == "foo bar"


def test_fence_with_trailing_words_is_prose():
    assert fence_language("```python title=x") is None
    assert fence_language("```rust") == "rust"
    assert fence_language("```") == ""
    assert fence_language("text ```") is None


def test_empty_code_block_produces_no_segment():
    segments = segment("before\n```\n```\nafter")
    assert [s.text for s in segments] == ["before", "after"]


def test_line_order_and_inner_newlines_preserved():
    text = "a\n\nb\n```\nc\n\nd\n```\ne\n"
    rendered = format_response(text, PlainStyler())
    assert rendered.plain == "a\n\nb\nc\n\nd\ne\n"


def test_styler_receives_code_language():
    seen = []

    class RecordingStyler(PlainStyler):
        def code(self, line, language):
            seen.append((line, language))
            return Text(line.upper())

    rendered = format_response("x\n```sql\nselect 1\n```", RecordingStyler())
    assert seen == [("select 1", "sql")]
    assert rendered.plain == "x\nSELECT 1"


def test_syntax_styler_does_not_add_newlines():
    line = SyntaxStyler().code("def f(): pass", "python")
    assert line.plain == "def f(): pass"


def test_format_is_deterministic():
    text = "```python\nimport os\n```\nok"
    assert format_response(text) == format_response(text)
