"""
Category fetcher using the Merriam-Webster Collegiate Dictionary XML API.

The lexical category of a word is MW's "functional label" (<fl>).
For words with several entries only the first entry's label is used:
- dog -> noun
- run -> verb
"""

import xml.etree.ElementTree as ET
from typing import Optional
from urllib.parse import quote

import requests

from ..config import URLS, MERRIAM_WEBSTER_COLLEGIATE_KEY, REQUEST_TIMEOUT


def first_token(label: str) -> str:
    """
    Reduce a functional label to its first word.

    MW labels can be phrases such as "noun plural but singular in
    construction"; only "noun" is kept.
    """
    parts = label.split()
    return parts[0] if parts else ''


class CategoryFetcher:
    """
    Fetches functional labels for words from MW Collegiate.

    Transport problems are not handled here: HTTP errors and connection
    failures raise requests.RequestException, a malformed body raises
    ET.ParseError.
    """

    def __init__(self, api_key: str = MERRIAM_WEBSTER_COLLEGIATE_KEY,
                 base_url: str = URLS['mw_collegiate'],
                 timeout: float = REQUEST_TIMEOUT):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def fetch_label(self, word: str) -> Optional[str]:
        """
        Fetch the first functional label for a word.

        Args:
            word: The word to look up

        Returns:
            Label text, or None if the word has no entry with a label
        """
        url = f"{self.base_url}/{quote(word, safe='')}"
        resp = requests.get(url, params={'key': self.api_key}, timeout=self.timeout)
        resp.raise_for_status()

        return self.parse_label(resp.content)

    @staticmethod
    def parse_label(xml_data) -> Optional[str]:
        """Extract the first non-empty <fl> text from a response body."""
        root = ET.fromstring(xml_data)

        # Unknown words come back as <suggestion> elements with no <fl>
        for fl in root.iter('fl'):
            text = ''.join(fl.itertext()).strip()
            if text:
                return text

        return None

    def fetch_category(self, word: str) -> Optional[str]:
        """Fetch the lexical category (first token of the label), or None."""
        label = self.fetch_label(word)
        if label is None:
            return None
        return first_token(label) or None
