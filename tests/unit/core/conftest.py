"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two
"""

SAMPLE_META_MD = """\
Title: Test Doc
Author: Jane Roe
Keywords: wiki,
    markup

# Body Heading

Body content.
"""

SAMPLE_FM_MD = """\
---
title: Front Title
author: Me
tags: [a, b]
---

# Heading

Body content.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("gfm-like", options_update={"linkify": False})


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)


@pytest.fixture(name="sample_meta_md")
def sample_meta_md_fixture():
    return SAMPLE_META_MD


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD
