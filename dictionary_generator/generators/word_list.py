"""
Word list, dictionary and resume file handling.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, TextIO


@dataclass(frozen=True)
class DictionaryRecord:
    """One dictionary line: a word and its lexical category."""
    word: str
    category: str

    def to_line(self) -> str:
        return f"{self.word}, {self.category}"

    @classmethod
    def from_line(cls, line: str) -> 'DictionaryRecord':
        word, _, category = line.rstrip('\n').partition(', ')
        return cls(word=word, category=category)


def read_word_list(path) -> List[str]:
    """Read one word per line, skipping blank lines."""
    with open(path, 'r', encoding='utf-8') as f:
        return [line.strip() for line in f if line.strip()]


def write_resume_file(path, words: Iterable[str]) -> int:
    """
    Write words still to be looked up, one per line.

    Returns:
        Number of words written
    """
    count = 0
    with open(path, 'w', encoding='utf-8') as f:
        for word in words:
            f.write(word + "\n")
            count += 1
    return count


class DictionaryWriter:
    """
    Append-only dictionary file.

    Existing lines are never rewritten; each record is flushed as soon as
    it is appended.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._file: Optional[TextIO] = None

    def open(self) -> 'DictionaryWriter':
        if self._file is None:
            self._file = open(self.path, 'a', encoding='utf-8')
        return self

    def close(self):
        if self._file is not None:
            self._file.flush()
            self._file.close()
            self._file = None

    def __enter__(self) -> 'DictionaryWriter':
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def append(self, record: DictionaryRecord):
        if self._file is None:
            self.open()
        self._file.write(record.to_line() + "\n")
        self._file.flush()


def read_dictionary(path) -> List[DictionaryRecord]:
    """Load all records from a dictionary file."""
    path = Path(path)
    if not path.exists():
        return []

    with open(path, 'r', encoding='utf-8') as f:
        return [DictionaryRecord.from_line(line) for line in f if line.strip()]
