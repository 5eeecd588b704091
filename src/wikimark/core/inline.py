r"""Single-pass tokenizer turning one line of wiki inline markup into a block tree.

Recognized markup:

    *bold*   _italic_   {{monospace}}   [label|target]   [target]   [#anchor]
    {anchor:name}   {other-macro}   \\ (line break)   \x (literal x)

Spans may nest or overlap freely. Malformed markup never raises: it degrades to
literal text, and the delimiters of anything left open at end of line are dropped.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from wikimark.core.models import (
    Anchor,
    Block,
    Bold,
    Italic,
    Link,
    Linebreak,
    Monospace,
    SpanBlock,
    Text,
)


logger = logging.getLogger(__name__)

ANCHOR_PREFIX = "anchor:"

SPAN_DELIMITERS: dict[str, type[SpanBlock]] = {
    "*": Bold,
    "_": Italic,
}


@dataclass
class _ScanState:
    """Mutable state of one build call."""
    result:  list[Block] = field(default_factory=list)
    pending: list[Block] = field(default_factory=list)      # blocks produced while any span is open
    spans:   dict[type[SpanBlock], int] = field(default_factory=dict)  # open span -> pending mark, opening order
    text:    list[str] = field(default_factory=list)
    region:  Optional[str] = None                            # '[' or '{' while a link/macro absorbs input

    def emit(self, block: Block) -> None:
        """Attach a block to the innermost open context."""
        if self.spans:
            self.pending.append(block)
        else:
            self.result.append(block)

    def take_text(self) -> str:
        value = "".join(self.text)
        self.text.clear()
        return value

    def flush_text(self) -> None:
        if self.text:
            self.emit(Text(content=self.take_text()))

    def open_span(self, kind: type[SpanBlock]) -> None:
        self.flush_text()
        self.spans[kind] = len(self.pending)

    def close_span(self, kind: type[SpanBlock]) -> None:
        self.flush_text()
        order = list(self.spans)
        mark = self.spans.pop(kind)
        children = self.pending[mark:]
        del self.pending[mark:]

        # spans opened inside this one but still open start after its node
        for crossed in order[order.index(kind) + 1:]:
            self.spans[crossed] = mark + 1 if children else mark

        if not children:
            return
        node = kind(children=children)
        if self.spans:
            self.pending.append(node)
        else:
            self.result.extend(self.pending)
            self.pending.clear()
            self.result.append(node)

    def finish(self) -> list[Block]:
        if self.region is not None or self.spans:
            logger.debug("Unterminated markup at end of line: region=%r spans=%s",
                         self.region, [k.__name__ for k in self.spans])
        self.flush_text()
        self.result.extend(self.pending)
        self.pending.clear()
        self.spans.clear()
        return self.result


def _link(raw: str) -> Link:
    """Build a Link from the raw text between brackets."""
    if "|" in raw:
        label, target = raw.split("|", 1)
        return Link(target=target, label=label)
    if raw.startswith("#"):
        return Link(target=raw[1:], label=raw)
    return Link(target=raw, label=raw)


def _macro(name: str) -> Block:
    """Build the block for a single-brace macro; unknown macros stay literal."""
    if name.startswith(ANCHOR_PREFIX):
        return Anchor(name=name[len(ANCHOR_PREFIX):])
    return Text(content="{" + name + "}")


class InlineBuilder:
    """Builds block trees from single lines of wiki inline markup.

    Scan state lives only for the duration of one build() call, so an instance
    may be reused for any number of lines.
    """

    def build(self, line: str) -> list[Block]:
        """Tokenize line (no line terminators) into an ordered list of blocks."""
        state = _ScanState()
        i, n = 0, len(line)

        while i < n:
            c = line[i]
            nxt = line[i + 1] if i + 1 < n else ""

            if state.region == "[":
                if c == "]":
                    raw = state.take_text()
                    state.region = None
                    if raw:
                        state.emit(_link(raw))
                else:
                    state.text.append(c)
                i += 1
                continue

            if state.region == "{":
                if c == "}":
                    state.region = None
                    state.emit(_macro(state.take_text()))
                else:
                    state.text.append(c)
                i += 1
                continue

            if c in SPAN_DELIMITERS:
                kind = SPAN_DELIMITERS[c]
                if kind in state.spans:
                    state.close_span(kind)
                else:
                    state.open_span(kind)
            elif c == "[":
                state.flush_text()
                state.region = "["
            elif c == "{" and nxt == "{":
                if Monospace in state.spans:
                    state.text.append("{{")
                else:
                    state.open_span(Monospace)
                i += 1
            elif c == "{":
                state.flush_text()
                state.region = "{"
            elif c == "}" and nxt == "}" and Monospace in state.spans:
                state.close_span(Monospace)
                i += 1
            elif c == "\\" and nxt == "\\":
                state.flush_text()
                state.emit(Linebreak())
                i += 1
            elif c == "\\" and nxt:
                state.text.append(nxt)
                i += 1
            else:
                state.text.append(c)
            i += 1

        return state.finish()


def build_blocks(line: str) -> list[Block]:
    """Shortcut for InlineBuilder().build(line)."""
    return InlineBuilder().build(line)
