from __future__ import annotations

from dictionary_generator.utils.run_log import LogType, RunLog, format_line


def test_format_line_right_aligns_severity():
    assert format_line(LogType.INFO, "hello") == "    [Info]: hello"
    assert format_line(LogType.WARNING, "careful") == " [Warning]: careful"
    assert format_line(LogType.ERROR, "bad") == "   [Error]: bad"
    assert format_line(LogType.NORMAL, "ok") == "  [Normal]: ok"


def test_run_log_writes_console_and_file(tmp_path, capsys):
    path = tmp_path / "log.txt"

    with RunLog(path) as log:
        log.normal("Program starting up now.")
        log.error("Could not find category for \"xyzzy\".")

    assert path.read_text(encoding="utf-8").splitlines() == [
        "  [Normal]: Program starting up now.",
        "   [Error]: Could not find category for \"xyzzy\".",
    ]
    assert "Program starting up now." in capsys.readouterr().out
    assert log.error_count == 1


def test_quiet_log_drops_info_but_counts_errors(tmp_path, capsys):
    path = tmp_path / "log.txt"

    with RunLog(path, verbose=False, echo=False) as log:
        log.info("1th entry added: dog, noun")
        log.warning("slow response")
        log.error("boom")

    assert path.read_text(encoding="utf-8").splitlines() == [
        " [Warning]: slow response",
        "   [Error]: boom",
    ]
    assert capsys.readouterr().out == ""
    assert log.error_count == 1
