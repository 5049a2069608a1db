"""Item serialization: JSON round-trip for MarkDownItem trees.

Converts parsed items to and from JSON-compatible dicts. Useful for:
- Caching parsed documents
- Handing the tree to consumers in another process or language
- Debugging and inspection

All JSON output is deterministic (sorted keys), so identical input text
serializes to identical bytes.

Example:
    from markymark import parse_markdown
    from markymark.serialization import to_json, from_json

    items = parse_markdown("# Hello **World**")
    assert from_json(to_json(items)) == items

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields
from enum import Enum
from typing import Any

from markymark.location import SourceLocation
from markymark.nodes import (
    Block,
    BlockQuote,
    Bold,
    CodeBlock,
    Header,
    HorizontalLine,
    Image,
    InlineCode,
    Italic,
    LineBreak,
    Link,
    List,
    ListItem,
    ListType,
    MarkDownItem,
    Paragraph,
    PlainText,
    Strikethrough,
    Table,
    TableCell,
    TableRow,
)

# Registry of item class names for deserialization
_ITEM_TYPES: dict[str, type[MarkDownItem]] = {
    cls.__name__: cls
    for cls in (
        Paragraph,
        Header,
        List,
        ListItem,
        BlockQuote,
        CodeBlock,
        HorizontalLine,
        Table,
        TableRow,
        TableCell,
        PlainText,
        Bold,
        Italic,
        Strikethrough,
        InlineCode,
        Link,
        Image,
        LineBreak,
    )
}

# Enum-valued fields, restored from their plain values
_ENUM_FIELDS: dict[str, type[Enum]] = {"list_type": ListType}


def to_dict(item: MarkDownItem) -> dict[str, Any]:
    """Convert an item to a JSON-compatible dict.

    Includes a ``_type`` discriminator (the class name) and an
    ``item_type`` tag for consumers that only need the semantic kind.
    Children, nested blocks and locations are serialized recursively.

    Args:
        item: Any MarkDownItem, custom dataclass subclasses included.

    Returns:
        Dict with ``_type`` and all item fields.

    """
    result: dict[str, Any] = {"_type": type(item).__name__, "item_type": str(item.item_type)}
    for f in fields(item):
        result[f.name] = _serialize_value(getattr(item, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, MarkDownItem):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "end_lineno": value.end_lineno,
            "offset": value.offset,
            "end_offset": value.end_offset,
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [_serialize_value(v) for v in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> MarkDownItem:
    """Reconstruct a built-in item from a dict.

    Args:
        data: Dict with ``_type`` and item fields (as produced by to_dict).

    Returns:
        Typed item (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or not a built-in item class.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized item"
        raise ValueError(msg)

    item_cls = _ITEM_TYPES.get(type_name)
    if item_cls is None:
        msg = f"Unknown item type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(item_cls):
        if f.name not in data:
            continue
        value = _deserialize_value(data[f.name])
        enum_cls = _ENUM_FIELDS.get(f.name)
        if enum_cls is not None:
            value = enum_cls(value)
        kwargs[f.name] = value
    # Hand-written block dicts may omit the location
    if issubclass(item_cls, Block) and "location" not in kwargs:
        kwargs["location"] = SourceLocation.unknown()
    return item_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        if value.get("_type") == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                end_lineno=value["end_lineno"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
            )
        if "_type" in value:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(v) for v in value)
    return value


def to_json(items: Sequence[MarkDownItem], *, indent: int | None = None) -> str:
    """Serialize parsed items to a JSON array.

    Args:
        items: Items as returned by the parser.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string with sorted keys.

    """
    return json.dumps([to_dict(item) for item in items], sort_keys=True, indent=indent)


def from_json(data: str) -> tuple[MarkDownItem, ...]:
    """Deserialize items from a JSON array produced by to_json.

    Raises:
        ValueError: If the JSON is not an array of serialized items.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of items, got {type(raw).__name__}"
        raise ValueError(msg)
    return tuple(from_dict(entry) for entry in raw)
