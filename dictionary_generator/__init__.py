"""
Dictionary Generator

Looks up the lexical category (noun, verb, ...) of every word in a word
list using the Merriam-Webster Collegiate Dictionary API and appends
"word, category" lines to a dictionary file, staying inside the daily
API call limit.
"""

from .config import VERSION

__version__ = VERSION
__all__ = ['app', 'VERSION']
