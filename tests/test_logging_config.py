import logging

from cidrexpand.logging_config import (
    ErrorTracker,
    configure_logging,
    get_error_stats,
    setup_logging,
    track_error,
)


def test_setup_logging_console_only():
    logger = setup_logging(level="WARNING")
    assert logger.name == "cidrexpand"
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_setup_logging_replaces_handlers():
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_setup_logging_unknown_level_falls_back_to_info():
    logger = setup_logging(level="VERBOSE")
    assert logger.level == logging.INFO


def test_setup_logging_file(tmp_path):
    log_file = tmp_path / "logs" / "out.log"
    logger = setup_logging(level="DEBUG", log_file=str(log_file))
    assert len(logger.handlers) == 2

    logging.getLogger("cidrexpand.ip.core").debug("expanding something")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text()
    assert "expanding something" in text
    assert "DEBUG" in text


def test_configure_logging_debug_overrides_level():
    logger = configure_logging(debug=True, level="ERROR")
    assert logger.level == logging.DEBUG


def test_error_tracker_counts():
    tracker = ErrorTracker()
    tracker.log_error("invalid_cidr", "bad one")
    tracker.log_error("invalid_cidr", "bad two", level=logging.WARNING)
    tracker.log_error("invalid_binary", "bad bits", context={"bits": "102"})
    assert tracker.get_error_counts() == {"invalid_cidr": 2, "invalid_binary": 1}

    tracker.reset_counts()
    assert tracker.get_error_counts() == {}


def test_track_error_global(caplog):
    with caplog.at_level(logging.WARNING, logger="cidrexpand"):
        track_error("invalid_cidr", "skipping", context={"cidr": "x"}, level=logging.WARNING)

    assert get_error_stats() == {"invalid_cidr": 1}
    assert "Context: {'cidr': 'x'}" in caplog.text
