"""
Dictionary generator.

Looks up the lexical category of every word in a word list and appends
"word, category" lines to a dictionary file, one remote call per word.

Key features:
- Checks the daily API call quota before every lookup
- Skips words the dictionary doesn't know, logging each one
- When the quota runs out, dumps the unprocessed words to a resume file
  so the next run only looks up new words
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
import threading
from typing import Callable, Dict, List, Optional, Sequence
import xml.etree.ElementTree as ET

import requests

from ..config import (
    RESUME_FILE, DEFAULT_WORD_LIST, DEFAULT_DICTIONARY, default_log_path
)
from ..fetchers.category_fetcher import CategoryFetcher, first_token
from ..fetchers.quota import QuotaState, SettingsStore, can_call_api, quota_status
from ..utils.run_log import RunLog
from .word_list import DictionaryRecord, DictionaryWriter, read_word_list, write_resume_file


class LookupErrorKind(Enum):
    """Why a lookup failed."""
    NOT_FOUND = "not_found"  # Skip this word, keep going
    QUOTA_EXCEEDED = "quota_exceeded"  # Stop the run, dump the rest
    FATAL = "fatal"  # Transport/parse failure, abort the run


class DictionaryLookupError(Exception):
    """Raised when a single word could not be looked up."""
    def __init__(self, message: str, kind: LookupErrorKind = LookupErrorKind.NOT_FOUND):
        super().__init__(message)
        self.kind = kind


@dataclass
class LookupResult:
    """Outcome of one lookup: a category, or an error kind."""
    word: str
    category: Optional[str] = None
    error: Optional[LookupErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Summary:
    """What a run did."""
    entries_added: int = 0
    errors: int = 0
    quota_exhausted: bool = False
    remaining: int = 0
    aborted: bool = False
    fatal_error: str = ""
    records: List[DictionaryRecord] = field(default_factory=list)

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['records'] = [r.to_line() for r in self.records]
        return data


class DictionaryGenerator:
    """
    Quota-aware batch lookup of lexical categories.

    The quota state is loaded from the settings store once and written
    back after every remote call. Checking the quota, calling the API and
    recording the call happen under one lock, so concurrent callers can't
    overrun the daily limit.
    """

    QUOTA_MESSAGE = "API Call Limit reached. Cannot call API again until tomorrow. Sorry!"

    def __init__(self, fetcher: Optional[CategoryFetcher] = None,
                 store: Optional[SettingsStore] = None,
                 quota: Optional[QuotaState] = None,
                 log: Optional[RunLog] = None,
                 resume_path=RESUME_FILE,
                 clock: Callable[[], datetime] = datetime.now):
        self.fetcher = fetcher or CategoryFetcher()
        self.store = store
        if quota is None:
            quota = QuotaState.load(store) if store is not None else QuotaState()
        self.quota = quota
        self.log = log or RunLog()
        self.resume_path = Path(resume_path)
        self.clock = clock
        self._lock = threading.Lock()

    def can_call_api(self) -> bool:
        """True if today's quota allows another remote call."""
        return can_call_api(self.quota, self.clock())

    def get_status(self) -> Dict:
        """Current quota status."""
        return quota_status(self.quota, self.clock())

    def _record_call(self):
        self.quota = self.quota.record_call(self.clock())
        if self.store is not None:
            self.quota.save(self.store)

    def lookup_category(self, word: str) -> LookupResult:
        """
        Look up the lexical category of a word.

        A call counts against the quota as soon as a response has been
        received, whether or not it contains a category.
        """
        with self._lock:
            return self._lookup_category(word)

    def _lookup_category(self, word: str) -> LookupResult:
        if not self.can_call_api():
            return LookupResult(
                word=word,
                error=LookupErrorKind.QUOTA_EXCEEDED,
                message="Can't call the API right now because the API Call Limit has been reached.",
            )

        try:
            label = self.fetcher.fetch_label(word)
        except requests.RequestException as e:
            return LookupResult(word=word, error=LookupErrorKind.FATAL,
                                message=f"Lookup of \"{word}\" failed: {e}")
        except ET.ParseError as e:
            self._record_call()
            return LookupResult(word=word, error=LookupErrorKind.FATAL,
                                message=f"Could not parse response for \"{word}\": {e}")

        self._record_call()

        category = first_token(label) if label else ''
        if not category:
            return LookupResult(word=word, error=LookupErrorKind.NOT_FOUND,
                                message=f"Could not find category for \"{word}\".")

        return LookupResult(word=word, category=category)

    def get_dictionary_entry(self, word: str) -> str:
        """
        Return "word, category" for a single word.

        Raises:
            DictionaryLookupError: if the lookup failed, with the failure kind
        """
        result = self.lookup_category(word)
        if not result.ok:
            raise DictionaryLookupError(result.message, result.error)
        return DictionaryRecord(word, result.category).to_line()

    def run(self, words: Sequence[str], sink, summary: Optional[Summary] = None) -> Summary:
        """
        Look up every word in order and append the results to `sink`.

        Args:
            words: Words to look up
            sink: Anything with an append(DictionaryRecord) method
            summary: Summary to fill in; counts survive if the sink raises

        Returns:
            Summary of entries added and errors
        """
        words = list(words)
        if summary is None:
            summary = Summary()

        for index, word in enumerate(words):
            if not self.can_call_api():
                self._dump_remaining(words[index:], summary)
                break

            result = self.lookup_category(word)

            if result.ok:
                record = DictionaryRecord(word, result.category)
                sink.append(record)
                summary.entries_added += 1
                summary.records.append(record)
                self.log.info(f"{summary.entries_added}th entry added: {record.to_line()}")

            elif result.error == LookupErrorKind.NOT_FOUND:
                summary.errors += 1
                self.log.error(result.message)

            elif result.error == LookupErrorKind.QUOTA_EXCEEDED:
                self._dump_remaining(words[index:], summary)
                break

            else:
                summary.errors += 1
                summary.aborted = True
                summary.fatal_error = result.message
                self.log.error(result.message)
                self.log.normal("Saving dictionary to disk and exiting now.")
                break

        return summary

    def _dump_remaining(self, remaining: List[str], summary: Summary):
        summary.quota_exhausted = True
        self.log.error(self.QUOTA_MESSAGE)
        self.log.normal(f"API Call Limit is: {self.quota.daily_limit}")
        self.log.normal(f"Dumping remaining words in word list to: <{self.resume_path}>")
        summary.remaining = write_resume_file(self.resume_path, remaining)


def print_banner(generator: DictionaryGenerator, word_list_path, dictionary_path, log_path):
    status = generator.get_status()
    print("Dictionary Generator")
    print("=" * 35)
    print(f"~~ API Calls Remaining ~~ (For Today): {status['remaining_today']}")
    print()
    print(f"Word List:  {word_list_path}")
    print(f"Dictionary: {dictionary_path}")
    print(f"Log File:   {log_path}")
    print()


def create_dictionary(word_list_path=DEFAULT_WORD_LIST,
                      dictionary_path=DEFAULT_DICTIONARY,
                      log_path: Optional[str] = None,
                      generator: Optional[DictionaryGenerator] = None) -> Summary:
    """
    Run a full dictionary generation: word list in, dictionary lines appended.

    Always ends with the number of errors logged and all files closed.
    """
    log_path = log_path or default_log_path()
    if generator is None:
        generator = DictionaryGenerator(store=SettingsStore())

    print_banner(generator, word_list_path, dictionary_path, log_path)

    summary = Summary()
    run_log = RunLog(log_path, verbose=generator.log.verbose, echo=generator.log.echo)
    generator.log = run_log

    with run_log:
        run_log.normal("Program starting up now.")
        try:
            run_log.info(f"Loading the word list from <{word_list_path}>.")
            words = read_word_list(word_list_path)

            run_log.info(f"Loading the dictionary from <{dictionary_path}>.")
            with DictionaryWriter(dictionary_path) as writer:
                generator.run(words, writer, summary)

            if not summary.aborted:
                run_log.normal("Finished dictionary.")
                run_log.normal("Closed all resources. Program terminating now...")
        except (OSError, ValueError) as e:
            summary.aborted = True
            summary.fatal_error = str(e)
            run_log.error(str(e))
            run_log.normal("Saving dictionary to disk and exiting now.")
        finally:
            run_log.normal(f"Finished program with {run_log.error_count} error(s).")

    return summary
