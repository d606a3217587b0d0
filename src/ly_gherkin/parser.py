from __future__ import annotations

import logging
from typing import Any, Mapping

from gherkin.errors import ParserError
from gherkin.parser import Parser
from gherkin.token_scanner import TokenScanner

from .errors import ParseError

logger = logging.getLogger(__name__)

__all__ = ["DocumentParser"]


class DocumentParser:
    """Parse Gherkin text with the official grammar."""

    def parse(self, text: str, uri: str | None = None) -> Mapping[str, Any]:
        """
        Return the gherkin document as produced by the grammar library.

        A new grammar parser is used for every document so a failure never leaks state into
        the next one.
        """
        logger.debug("Parsing %s", uri or "<string>")
        try:
            return Parser().parse(TokenScanner(text))
        except ParserError as e:
            raise ParseError(str(e), uri) from e
