"""Tests for protected code spans."""

from chatmark import RenderConfig, SpanTable, protect, restore
from chatmark.nodes import ProtectedSpan
from chatmark.spans import BLOCK_CLOSE, BLOCK_OPEN, INLINE_CLOSE, INLINE_OPEN


def block_token(index: int) -> str:
    return f"{BLOCK_OPEN}CODEBLOCK{index}{BLOCK_CLOSE}"


def inline_token(index: int) -> str:
    return f"{INLINE_OPEN}SPAN{index}{INLINE_CLOSE}"


class TestProtect:
    def test_inline_code(self) -> None:
        text, spans = protect("Run `ls -l` now")
        assert text == f"Run {inline_token(0)} now"
        assert list(spans) == [ProtectedSpan(token=inline_token(0), rendered="<code>ls -l</code>")]

    def test_fence_protected_before_inline(self) -> None:
        text, spans = protect("```\na `b` c\n```")
        assert text == block_token(0)
        assert len(spans) == 1
        assert spans[0].rendered == "<pre><code>a `b` c</code></pre>"

    def test_indices_follow_insertion_order(self) -> None:
        text, spans = protect("`x` then\n```\ny\n```")
        # The fence is lifted first, so it owns index 0.
        assert text == f"{inline_token(1)} then\n{block_token(0)}"
        assert [span.rendered for span in spans] == [
            "<pre><code>y</code></pre>",
            "<code>x</code>",
        ]

    def test_code_is_escaped(self) -> None:
        _, spans = protect("`<b>&`")
        assert spans[0].rendered == "<code>&lt;b&gt;&amp;</code>"

    def test_fence_content_is_trimmed(self) -> None:
        _, spans = protect("```\n\n  code  \n\n```")
        assert spans[0].rendered == "<pre><code>code</code></pre>"

    def test_single_line_fence_has_no_language(self) -> None:
        _, spans = protect("```echo hi```")
        assert spans[0].rendered == "<pre><code>echo hi</code></pre>"

    def test_language_tag(self) -> None:
        _, spans = protect("```js  \nx\n```")
        assert spans[0].rendered == '<pre><code class="language-js">x</code></pre>'

    def test_language_prefix_from_config(self) -> None:
        _, spans = protect("```c++\nx\n```", config=RenderConfig(code_class_prefix="lang-"))
        assert spans[0].rendered == '<pre><code class="lang-c++">x</code></pre>'

    def test_unterminated_fence_is_left_alone(self) -> None:
        text, spans = protect("```\nno close")
        assert text == "```\nno close"
        assert len(spans) == 0

    def test_forged_tokens_are_stripped(self) -> None:
        text, spans = protect(block_token(0))
        assert text == "CODEBLOCK0"
        assert len(spans) == 0

    def test_non_text(self) -> None:
        text, spans = protect(None)  # type: ignore[arg-type]
        assert text == ""
        assert len(spans) == 0


class TestRestore:
    def test_round_trip(self) -> None:
        text, spans = protect("a `b` c\n```py\nd\n```")
        assert restore(text, spans) == (
            'a <code>b</code> c\n<pre><code class="language-py">d</code></pre>'
        )

    def test_nested_tokens_expand(self) -> None:
        table = SpanTable()
        code = table.add("<code>u</code>")
        opening = table.add(f'<a href="{code}">')
        assert restore(f"{opening}x</a>", table) == '<a href="<code>u</code>">x</a>'

    def test_missing_token_is_not_an_error(self) -> None:
        table = SpanTable()
        table.add("<code>x</code>")
        assert restore("nothing here", table) == "nothing here"


class TestSpanTable:
    def test_tokens_are_unique(self) -> None:
        table = SpanTable()
        tokens = [table.add("x"), table.add("y", block=True), table.add("z")]
        assert len(set(tokens)) == 3
        assert tokens[1] == block_token(1)

    def test_repr(self) -> None:
        table = SpanTable()
        table.add("x")
        assert repr(table) == "SpanTable(1 spans)"
