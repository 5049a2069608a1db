"""Parse Markdown into typed items and render them as HTML."""

from markymark import parse_markdown, render_html

items = parse_markdown("# Hello **World**\n\n- one\n- two")
print(items[0].content)
print(render_html(items))
