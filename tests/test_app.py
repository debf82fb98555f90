from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import NOW
from dictionary_generator import app as app_module
from dictionary_generator.fetchers.quota import QuotaState


@pytest.fixture()
def generator(make_generator, fetcher):
    fetcher.labels = {"run": "verb", "xyzzy": None}
    return make_generator(quota=QuotaState(daily_limit=3))


@pytest.fixture()
def client(tmp_path, monkeypatch, generator):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(app_module, "_generator", generator)
    app_module.app.config.update({"TESTING": True})
    with app_module.app.test_client() as test_client:
        yield test_client


def test_status_reports_quota(client):
    response = client.get("/api/status")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["daily_limit"] == 3
    assert payload["remaining_today"] == 3
    assert payload["can_call_api"] is True
    assert payload["api_configured"] is True


def test_entry_requires_word(client):
    response = client.get("/api/entry")

    assert response.status_code == 400


def test_entry_returns_category(client):
    response = client.get("/api/entry", query_string={"word": "run"})

    assert response.status_code == 200
    assert response.get_json() == {"entry": "run, verb", "word": "run", "category": "verb"}


def test_entry_not_found(client):
    response = client.get("/api/entry", query_string={"word": "xyzzy"})

    assert response.status_code == 404
    assert response.get_json()["kind"] == "not_found"


def test_entry_quota_exceeded(client, generator, fetcher):
    generator.quota = QuotaState(last_access=NOW - timedelta(minutes=1), calls_made=3, daily_limit=3)

    response = client.get("/api/entry", query_string={"word": "run"})

    assert response.status_code == 429
    assert fetcher.calls == []


def test_generate_start_runs_batch(client, tmp_path):
    word_list = tmp_path / "words.txt"
    word_list.write_text("run\nxyzzy\napple\nblue\npear\n", encoding="utf-8")
    dictionary = tmp_path / "dict.csv"

    response = client.post(
        "/api/generate/start",
        json={"word_list": str(word_list), "dictionary": str(dictionary)},
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["entries_added"] == 2
    assert payload["errors"] == 1
    assert payload["quota_exhausted"] is True
    assert payload["remaining"] == 2
    assert payload["records"] == ["run, verb", "apple, noun"]
    assert payload["status"]["remaining_today"] == 0
    assert dictionary.read_text(encoding="utf-8").splitlines() == ["run, verb", "apple, noun"]


def test_generate_start_missing_word_list(client, tmp_path):
    response = client.post(
        "/api/generate/start",
        json={"word_list": str(tmp_path / "missing.txt")},
    )

    assert response.status_code == 404


def test_generate_start_rejects_concurrent_run(client, tmp_path):
    word_list = tmp_path / "words.txt"
    word_list.write_text("run\n", encoding="utf-8")

    app_module._run_lock.acquire()
    try:
        response = client.post("/api/generate/start", json={"word_list": str(word_list)})
    finally:
        app_module._run_lock.release()

    assert response.status_code == 409


def test_generate_start_rejects_paths_outside_working_directory(client, tmp_path):
    word_list = tmp_path / "words.txt"
    word_list.write_text("run\n", encoding="utf-8")
    outside = tmp_path.parent / "outside.csv"

    response = client.post(
        "/api/generate/start",
        json={"word_list": str(word_list), "dictionary": str(outside)},
    )

    assert response.status_code == 400
    assert not outside.exists()


def test_generate_start_rejects_relative_escape(client, tmp_path):
    (tmp_path / "words.txt").write_text("run\n", encoding="utf-8")

    response = client.post(
        "/api/generate/start",
        json={"word_list": "words.txt", "dictionary": "../escaped.csv"},
    )

    assert response.status_code == 400
    assert not (tmp_path.parent / "escaped.csv").exists()


def test_generate_start_accepts_relative_paths(client, tmp_path):
    (tmp_path / "words.txt").write_text("run\n", encoding="utf-8")

    response = client.post(
        "/api/generate/start",
        json={"word_list": "words.txt", "dictionary": "out.csv"},
    )

    assert response.status_code == 200
    assert (tmp_path / "out.csv").read_text(encoding="utf-8") == "run, verb\n"


def test_generate_start_invalid_utf8_word_list(client, tmp_path):
    (tmp_path / "words.txt").write_bytes(b"apple\n\xff\xfe\n")

    response = client.post("/api/generate/start", json={"word_list": "words.txt"})

    assert response.status_code == 400
