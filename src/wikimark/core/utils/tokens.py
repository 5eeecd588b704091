"""Shared markdown-it token utilities"""

from typing import Optional


def is_comment_block(token) -> bool:
    """True for an html_block token holding only an HTML comment."""
    return token.type == 'html_block' and token.content.lstrip().startswith('<!--')


def inline_text(token) -> str:
    """Collect the plain text of an inline token, dropping markup."""
    parts = []
    for child in token.children or []:
        if child.type in ('text', 'code_inline'):
            parts.append(child.content)
        elif child.type in ('softbreak', 'hardbreak'):
            parts.append(' ')
    return ''.join(parts)


def leading_heading_text(tokens: list) -> Optional[str]:
    """Return the text of the first top-level block if it is a heading, skipping comments."""
    for i, tok in enumerate(tokens):
        if tok.level != 0 or tok.nesting == -1 or is_comment_block(tok):
            continue
        if tok.type == 'heading_open' and i + 1 < len(tokens):
            return inline_text(tokens[i + 1]).strip() or None
        return None
    return None
