"""
Turns raw answer text into typed display blocks (headers, paragraphs, lists).
"""

import re
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Header(BaseModel):
    """A heading line."""
    kind: Literal["header"] = "header"
    text: str


class Paragraph(BaseModel):
    """A plain line of text."""
    kind: Literal["paragraph"] = "paragraph"
    text: str


class ListBlock(BaseModel):
    """Consecutive list items, bulleted or numbered."""
    kind: Literal["list"] = "list"
    items: List[str] = Field(default_factory=list)


Block = Union[Header, Paragraph, ListBlock]

# "- item", "* item", "• item", "1. item"
LIST_ITEM_PATTERN = re.compile(r'^(?:[-*•]|\d+\.)\s+(.*)$')
MARKDOWN_HEADER_PATTERN = re.compile(r'^#+\s*')
CAPS_HEADER_MAX_LENGTH = 50


def _list_item(line: str) -> Optional[str]:
    match = LIST_ITEM_PATTERN.match(line)
    return match.group(1) if match else None


def _is_header(line: str) -> bool:
    if MARKDOWN_HEADER_PATTERN.match(line):
        return True
    return len(line) < CAPS_HEADER_MAX_LENGTH and line == line.upper()


def format_response(text: Optional[str]) -> List[Block]:
    """
    Classify each non-blank line of an answer into display blocks.

    List items are checked first and accumulate until a non-list line closes
    the list. Remaining lines are headers (a leading ``#`` run, or a short
    all-caps line) or paragraphs.

    Args:
        text: Raw answer text

    Returns:
        Blocks in input order; empty for empty input
    """
    if not text:
        return []

    blocks: List[Block] = []
    list_items: List[str] = []

    for raw_line in text.split('\n'):
        line = raw_line.strip()
        if not line:
            continue

        item = _list_item(line)
        if item is not None:
            list_items.append(item)
            continue

        if list_items:
            blocks.append(ListBlock(items=list_items))
            list_items = []

        if _is_header(line):
            blocks.append(Header(text=MARKDOWN_HEADER_PATTERN.sub('', line)))
        else:
            blocks.append(Paragraph(text=line))

    if list_items:
        blocks.append(ListBlock(items=list_items))

    return blocks


def render_plain(blocks: List[Block]) -> str:
    """
    Rebuild marker text from blocks.

    Headers get a ``#`` marker and list items a ``-`` bullet, so feeding the
    result back to format_response yields the same blocks.
    """
    lines = []
    for block in blocks:
        if isinstance(block, Header):
            lines.append(f"# {block.text}")
        elif isinstance(block, ListBlock):
            lines.extend(f"- {item}" for item in block.items)
        else:
            lines.append(block.text)
    return '\n'.join(lines)
