"""
Field matching strategies for listing panels.

Each matcher looks at one panel (a BeautifulSoup ``Tag``) and returns the
field text it finds, or None when its strategy does not apply. Matchers are
combined with ``first_match`` so fallbacks are tried in a fixed order.
"""
import re
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence

from bs4 import Tag

import logging
logger = logging.getLogger(__name__)


class LabelMatcher(ABC):
    name: str = "base"

    @abstractmethod
    def match(self, block: Tag) -> Optional[str]:
        """Return the matched text for this block, or None."""

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"


class LabeledFieldMatcher(LabelMatcher):
    """
    Finds a text node containing a label (e.g. "Valor:") and returns the
    text of its containing element with the label removed.

    Label matching is a case-sensitive substring search. ``pattern`` is a
    regular expression so that label variants can be given as alternatives
    ("Data de abertura|Abertura"). A colon directly after the label is
    removed together with it.
    """

    def __init__(self, name: str, pattern: str):
        self.name = name
        self.pattern = re.compile(pattern)
        self.strip_pattern = re.compile(f"(?:{pattern}):?")

    def match(self, block: Tag) -> Optional[str]:
        node = block.find(string=self.pattern)
        if node is None:
            return None

        text = self._container_text(node, block)
        return self.strip_pattern.sub("", text, count=1).strip()

    def _container_text(self, node, block: Tag) -> str:
        element = node.parent
        text = element.get_text()
        if self.strip_pattern.sub("", text, count=1).strip() or element is block:
            return text

        # Label wrapped in its own tag (<b>Valor:</b> R$ 1,00): value sits in the parent
        if element.parent is not None and element.parent is not block:
            logger.debug(f"{self.name}: label element is empty, using its parent")
            return element.parent.get_text()

        # Label tag directly under the panel: value is the text right after it
        sibling = element.next_sibling
        if sibling is None:
            return text
        logger.debug(f"{self.name}: label element is empty, using its next sibling")
        sibling_text = sibling.get_text() if isinstance(sibling, Tag) else str(sibling)
        return text + sibling_text


class UpperCaseTextMatcher(LabelMatcher):
    """
    Picks the first element whose text is entirely upper-case, contains a
    letter and has no colon. Only the first tag in ``tags`` that occurs in
    the block is scanned.
    """

    def __init__(self, name: str, tags: Sequence[str] = ("font", "p")):
        self.name = name
        self.tags = tuple(tags)

    def match(self, block: Tag) -> Optional[str]:
        elements = []
        for tag in self.tags:
            elements = block.find_all(tag)
            if elements:
                break

        for el in elements:
            text = el.get_text()
            if self.is_candidate(text):
                return text.strip()
        return None

    @staticmethod
    def is_candidate(text: str) -> bool:
        return (
            text == text.upper()
            and any(c.isalpha() for c in text)
            and ":" not in text
        )


def first_match(matchers: Iterable[LabelMatcher], block: Tag) -> Optional[str]:
    """Try matchers in order; return the first non-None result."""
    for matcher in matchers:
        value = matcher.match(block)
        if value is not None:
            logger.debug(f"Matched {matcher.name}: {value}")
            return value
    return None
