"""
Markdown to HTML conversion with Pygments highlighting for fenced code.
"""

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

HIGHLIGHT_CSS_CLASS = 'highlight'


class HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer that passes raw HTML through and highlights code blocks."""

    def __init__(self, formatter):
        super().__init__(escape=False)
        self.formatter = formatter

    def block_code(self, code, info=None):
        lang = info.strip().split(None, 1)[0] if info and info.strip() else None
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                return highlight(code, lexer, self.formatter)
            escaped_lang = mistune.escape(lang)
            return '<pre><code class="language-{}">{}</code></pre>\n'.format(escaped_lang, mistune.escape(code))
        return '<pre><code>{}</code></pre>\n'.format(mistune.escape(code))


class MarkdownRenderer:
    def __init__(self, style='default'):
        try:
            get_style_by_name(style)
        except ClassNotFound:
            raise ValueError(f"Unknown highlight style: {style}")
        self.style = style
        self.formatter = HtmlFormatter(style=style, cssclass=HIGHLIGHT_CSS_CLASS)
        self.markdown_parser = self.create_markdown_parser()

    def create_markdown_parser(self):
        """Create a Mistune markdown parser with the highlighting renderer."""
        return mistune.create_markdown(
            renderer=HighlightRenderer(self.formatter),
            plugins=['table', 'task_lists', 'strikethrough']
        )

    def render(self, text):
        """Convert markdown text to HTML."""
        return self.markdown_parser(text)

    def stylesheet(self):
        """CSS rules for the configured Pygments style."""
        return self.formatter.get_style_defs(f'.{HIGHLIGHT_CSS_CLASS}')
