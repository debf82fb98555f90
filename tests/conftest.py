from __future__ import annotations

from datetime import datetime

import pytest
import requests

from dictionary_generator.fetchers import quota as quota_module
from dictionary_generator.fetchers.quota import QuotaState, SettingsStore
from dictionary_generator.generators.dictionary_generator import DictionaryGenerator
from dictionary_generator.utils.run_log import RunLog

NOW = datetime(2024, 3, 14, 15, 9, 26)


class FakeFetcher:
    """Stands in for CategoryFetcher; labels maps word -> label (None = not found)."""

    configured = True

    def __init__(self, labels=None, fail_on=()):
        self.labels = labels or {}
        self.fail_on = set(fail_on)
        self.calls = []

    def fetch_label(self, word):
        self.calls.append(word)
        if word in self.fail_on:
            raise requests.ConnectionError(f"connection refused for {word}")
        return self.labels.get(word, "noun")


@pytest.fixture(autouse=True)
def no_limit_override(monkeypatch):
    monkeypatch.setattr(quota_module, "DAILY_LIMIT_OVERRIDE", None)


@pytest.fixture()
def fetcher():
    return FakeFetcher()


@pytest.fixture()
def store(tmp_path):
    return SettingsStore(tmp_path / "settings.json")


@pytest.fixture()
def make_generator(tmp_path, store, fetcher):
    def _make(quota=None, **kwargs):
        kwargs.setdefault("fetcher", fetcher)
        kwargs.setdefault("store", store)
        kwargs.setdefault("log", RunLog(echo=False, verbose=True))
        kwargs.setdefault("resume_path", tmp_path / "remainingWordList.txt")
        kwargs.setdefault("clock", lambda: NOW)
        return DictionaryGenerator(quota=quota if quota is not None else QuotaState(daily_limit=1000), **kwargs)

    return _make
