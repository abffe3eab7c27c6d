"""
Access to the page's embedded initial state.

Listing pages ship their first-paint state as a JSON document stored in a
JavaScript string literal::

    window.__PRERENDERED_STATE__= "{\\"listing\\": ...}";

PrerenderedStateSlot finds that assignment in the HTML, reads the string and
writes a replacement back in the same place.
"""

import json
import re
from typing import Optional


STATE_ASSIGNMENT_PATTERN = re.compile(
    r'(window\.__PRERENDERED_STATE__\s*=\s*)("[^"\\]*(?:\\.[^"\\]*)*")',
    re.DOTALL,
)


class PrerenderedStateSlot:
    """The ``window.__PRERENDERED_STATE__`` assignment inside an HTML document."""

    def __init__(self, html: str):
        self.html = html
        self._match = STATE_ASSIGNMENT_PATTERN.search(html)

    @property
    def present(self) -> bool:
        return self._match is not None

    def read(self) -> Optional[str]:
        """Return the JSON string held by the slot, or None when absent.

        Raises:
            ValueError: If the string literal cannot be decoded
        """
        if self._match is None:
            return None
        return json.loads(self._match.group(2))

    def write(self, state: str) -> str:
        """Return the document with the slot holding a new state string."""
        if self._match is None:
            return self.html

        # "</" inside a script block would end it early
        literal = json.dumps(state, ensure_ascii=False).replace('</', '<\\/')
        start, end = self._match.span(2)
        return self.html[:start] + literal + self.html[end:]
