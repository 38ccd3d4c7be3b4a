"""End-to-end tests for the content pipeline."""

from chatmark import escape, render, render_trusted, render_untrusted, sanitize, to_markup

WELCOME = (
    "Hi, I'm **Sky**. I love running!\n\n"
    "Ask me anything about the **charity marathon**."
)


class TestRenderUntrusted:
    def test_composes_transformer_and_sanitizer(self) -> None:
        text = "# Hi\n<b onclick='x'>raw</b> and **md**"
        assert render_untrusted(text) == sanitize(to_markup(text))

    def test_welcome_message(self) -> None:
        assert render_untrusted(WELCOME) == (
            "Hi, I'm <strong>Sky</strong>. I love running!\n\n"
            "Ask me anything about the <strong>charity marathon</strong>."
        )

    def test_markdown_link_keeps_new_context_policy(self) -> None:
        assert render_untrusted("[docs](https://example.com)") == (
            '<a href="https://example.com" target="_blank" rel="noopener noreferrer">docs</a>'
        )

    def test_markdown_script_link_loses_href(self) -> None:
        result = render_untrusted("[click](javascript:alert(1))")
        assert "javascript" not in result
        assert "href" not in result
        assert 'rel="noopener noreferrer"' in result

    def test_markdown_script_image_loses_src(self) -> None:
        result = render_untrusted("![x](javascript:alert(1))")
        assert result.startswith("<img ")
        assert "src=" not in result

    def test_raw_script_is_neutralized(self) -> None:
        assert render_untrusted("**hi** <script>x</script>") == "<strong>hi</strong> x"

    def test_code_content_is_literal(self) -> None:
        assert render_untrusted("```html\n<script>alert(1)</script>\n```") == (
            '<pre><code class="language-html">&lt;script&gt;alert(1)&lt;/script&gt;</code></pre>'
        )

    def test_fenced_markdown_is_not_emphasis(self) -> None:
        assert render_untrusted("```\n**not bold**\n```") == "<pre><code>**not bold**</code></pre>"

    def test_list_and_quote(self) -> None:
        assert render_untrusted("> note\n\n- a\n- b") == (
            "<blockquote>note</blockquote>\n\n<ul><li>a</li>\n<li>b</li></ul>"
        )

    def test_query_string_in_text(self) -> None:
        assert render_untrusted("see https://x/?q=1&lang=en") == "see https://x/?q=1&amp;lang=en"

    def test_query_string_in_link(self) -> None:
        result = render_untrusted("[x](https://shop.example/?a=1&copy=2&reg=3)")
        assert 'href="https://shop.example/?a=1&amp;copy=2&amp;reg=3"' in result

    def test_query_string_in_image(self) -> None:
        result = render_untrusted("![p](https://img.example/p.png?w=1&times=2)")
        assert 'src="https://img.example/p.png?w=1&amp;times=2"' in result

    def test_deterministic(self) -> None:
        text = "*a* `b` [c](d) ![e](f)\n---"
        assert render_untrusted(text) == render_untrusted(text)

    def test_does_not_mutate_input(self) -> None:
        text = "**x**"
        render_untrusted(text)
        assert text == "**x**"

    def test_output_is_stable_under_sanitize(self) -> None:
        out = render_untrusted("# T\n> q\n- i\n**b** _e_ ~~s~~ `c`")
        assert sanitize(out) == out

    def test_non_text(self) -> None:
        assert render_untrusted(None) == ""  # type: ignore[arg-type]


class TestRenderTrusted:
    def test_escapes(self) -> None:
        assert render_trusted("<b>&") == "&lt;b&gt;&amp;"

    def test_markdown_is_not_interpreted(self) -> None:
        assert render_trusted("**plain**") == "**plain**"

    def test_is_escape(self) -> None:
        assert render_trusted("a > b") == escape("a > b")


class TestRender:
    def test_untrusted_by_default(self) -> None:
        assert render("**x**") == "<strong>x</strong>"

    def test_trusted_flag(self) -> None:
        assert render("**x** <i>", trusted=True) == "**x** &lt;i&gt;"
