"""Tests for the command line entry point."""

import io
import json
import logging
from datetime import date

import pytest

from powerball_insights import main as cli
from powerball_insights.scraping.sources import CsvDrawingSource, TextDrawingSource


BALL_CSV = """date,ball_1,ball_2,ball_3,ball_4,ball_5,powerball
2025-04-05,4,23,30,46,62,2
2025-04-02,5,17,41,64,69,1
2025-03-31,4,23,41,52,60,2
"""


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "history.csv"
    path.write_text(BALL_CSV)
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop handlers installed by ``setup_logging`` during a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def test_source_for_path(tmp_path, csv_file, results_page_text):
    text_path = tmp_path / "page.txt"
    text_path.write_text(results_page_text)

    assert isinstance(cli.source_for_path(str(csv_file)), CsvDrawingSource)
    assert isinstance(cli.source_for_path(str(text_path)), TextDrawingSource)


def test_predict_command(csv_file, capsys):
    cli.main(["predict", "--file", str(csv_file), "--count", "3", "--seed", "1"])

    out = capsys.readouterr().out
    assert "Analyzing 3 drawings" in out
    assert "Hot white balls:" in out
    assert "4-23" in out
    assert "Sum average 180" in out
    assert "Prediction:" in out
    assert "Runner-up 2:" in out


def test_predict_with_frequencies(csv_file, capsys):
    cli.main(["predict", "--file", str(csv_file), "--count", "1", "--frequencies"])
    assert "White ball frequencies:" in capsys.readouterr().out


def test_predict_failure_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["predict", "--file", str(tmp_path / "missing.csv")])
    assert excinfo.value.code == 1


def test_serve_command(monkeypatch):
    calls = {}
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs))

    cli.main(["serve", "--port", "9001"])

    assert calls["app"] == "powerball_insights.api.routes:app"
    assert calls["port"] == 9001


def test_parser_defaults():
    args = cli.build_parser().parse_args(["predict"])
    assert args.file is None
    assert args.count is None
    assert args.frequencies is False


def test_source_for_path_window(csv_file):
    source = cli.source_for_path(str(csv_file), start=date(2025, 4, 1), end=date(2025, 4, 3))
    assert [r.date for r in source.load()] == [date(2025, 4, 2)]


def test_predict_date_range(csv_file, capsys):
    cli.main(["predict", "--file", str(csv_file), "--start", "2025-04-01", "--end", "2025-04-05",
              "--count", "1", "--seed", "1"])
    assert "Analyzing 2 drawings" in capsys.readouterr().out


def test_predict_start_after_end_exits(csv_file):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["predict", "--file", str(csv_file), "--start", "2025-04-05", "--end", "2025-04-01"])
    assert excinfo.value.code == 1


def test_predict_rejects_malformed_date(csv_file):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["predict", "--file", str(csv_file), "--start", "April 1"])
    assert excinfo.value.code == 2


def test_json_log_handler():
    stream = io.StringIO()
    logger = logging.getLogger("powerball_insights.predictions.predictor_engine")
    handler = cli.build_log_handler("json", stream)
    logger.addHandler(handler)
    try:
        logger.warning("Generated %s predictions", 3)
    finally:
        logger.removeHandler(handler)

    record = json.loads(stream.getvalue().splitlines()[0])
    assert record["event"] == "Generated 3 predictions"
    assert record["level"] == "warning"
    assert record["logger"] == "powerball_insights.predictions.predictor_engine"
    assert "timestamp" in record


def test_text_log_handler():
    stream = io.StringIO()
    logger = logging.getLogger("powerball_insights.scraping")
    handler = cli.build_log_handler("text", stream)
    logger.addHandler(handler)
    try:
        logger.warning("Live fetch failed")
    finally:
        logger.removeHandler(handler)

    assert " - powerball_insights.scraping - WARNING - Live fetch failed" in stream.getvalue()


def test_setup_logging_json(monkeypatch):
    monkeypatch.setattr(cli.settings, "log_format", "json")

    cli.setup_logging()

    root = logging.getLogger()
    assert len(root.handlers) == 1
    stream = io.StringIO()
    root.handlers[0].setStream(stream)
    logging.getLogger("powerball_insights.api.routes").warning("Drawing source failed")

    assert json.loads(stream.getvalue().splitlines()[0])["event"] == "Drawing source failed"
