"""Inline block tree models and document conversion results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class EscapeMode(str, Enum):
    """How markup escaping treats characters beyond the four HTML specials"""
    strict = "strict"
    ascii = "ascii"


class Text(BaseModel):
    """A literal run of text."""
    kind: Literal["text"] = "text"
    content: str = Field(..., min_length=1)


class SpanBlock(BaseModel):
    """Common shape of the delimited spans; never emitted directly."""
    children: list["Block"] = Field(default_factory=list)


class Bold(SpanBlock):
    kind: Literal["bold"] = "bold"


class Italic(SpanBlock):
    kind: Literal["italic"] = "italic"


class Monospace(SpanBlock):
    kind: Literal["monospace"] = "monospace"


class Link(BaseModel):
    """A link; target is the resolvable reference, label the display text."""
    kind: Literal["link"] = "link"
    target: str
    label: str


class Anchor(BaseModel):
    kind: Literal["anchor"] = "anchor"
    name: str


class Linebreak(BaseModel):
    kind: Literal["linebreak"] = "linebreak"


Block = Annotated[
    Union[Text, Bold, Italic, Monospace, Link, Anchor, Linebreak],
    Field(discriminator="kind"),
]

for _model in (SpanBlock, Bold, Italic, Monospace):
    _model.model_rebuild()

BlockList = TypeAdapter(list[Block])


@dataclass
class MarkdownDoc:
    """Markdown converted to an HTML body plus the head data found in its metadata."""
    title:    Optional[str]
    metadata: dict[str, str] = field(default_factory=dict)   # insertion ordered; excludes title
    body:     str = ""                                       # markdown-it HTML
