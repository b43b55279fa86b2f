"""
BeautifulSoup-based parsing helpers for competition pages.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Comment, Doctype, Tag

NON_VISIBLE_TAGS = ("script", "style", "noscript", "template", "head")


class HTMLParsingLayer:
    """
    Deterministic parser utilities for HTML documents.
    """

    @staticmethod
    def make_soup(html: str) -> BeautifulSoup:
        return BeautifulSoup(html or "", "html.parser")

    @staticmethod
    def clean_text(value: str | None) -> str:
        if not value:
            return ""
        return re.sub(r"\s+", " ", value).strip()

    @classmethod
    def node_text(cls, node: Tag | None) -> str:
        if node is None:
            return ""
        return cls.clean_text(node.get_text(" ", strip=True))

    @classmethod
    def page_title(cls, soup: BeautifulSoup) -> str:
        if soup.title is None:
            return ""
        return cls.clean_text(soup.title.get_text())

    @classmethod
    def visible_text(cls, soup: BeautifulSoup) -> str:
        """
        Text of the document body without script, style or head content.
        """

        root = soup.body or soup
        parts: list[str] = []
        for text in root.find_all(string=True):
            if isinstance(text, (Comment, Doctype)):
                continue
            if any(parent.name in NON_VISIBLE_TAGS for parent in text.parents):
                continue
            cleaned = cls.clean_text(str(text))
            if cleaned:
                parts.append(cleaned)
        return " ".join(parts)

    @classmethod
    def row_cell(cls, row: Tag, position: int) -> Tag | None:
        """
        Return the direct child at `position` (1-based, counting every
        element) when it is a `td`, as `td:nth-child(n)` selects it.
        """

        if position < 1:
            return None
        return row.select_one(f":scope > td:nth-child({position})")
