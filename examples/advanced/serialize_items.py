"""Cache parsed items as JSON and restore them."""

from markymark import parse_markdown, render_text
from markymark.serialization import from_json, to_json

items = parse_markdown("# Title\n\n| a | b |\n|---|---|\n| 1 | 2 |")
data = to_json(items, indent=2)
restored = from_json(data)

assert restored == items
print(data[:300])
print(render_text(restored))
