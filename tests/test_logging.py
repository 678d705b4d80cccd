"""Tests for tagged logging and package configuration."""

import logging

import pytest

import band_mean.logging as tagged
from band_mean import config
from band_mean.errors import InvalidArgument
from band_mean.logging import configure_global_logging, setup_tagged_logger


@pytest.fixture
def restore_logging(monkeypatch):
    root_level = logging.getLogger().level
    ours = [
        logging.getLogger(name) for name in list(logging.Logger.manager.loggerDict)
        if name.startswith("band_mean")
    ]
    levels = [(logger, logger.level, [h.level for h in logger.handlers]) for logger in ours]
    monkeypatch.setattr(tagged, "_global_logging_level", None)
    monkeypatch.delenv(tagged.LOG_LEVEL_ENV, raising=False)
    yield
    logging.getLogger().setLevel(root_level)
    for logger, level, handler_levels in levels:
        logger.setLevel(level)
        for handler, handler_level in zip(logger.handlers, handler_levels):
            handler.setLevel(handler_level)


def test_tagged_logger_includes_caller(capsys, restore_logging):
    logger = setup_tagged_logger("band_mean.tests.tagged_caller", logging.INFO)
    logger.info("window built")
    err = capsys.readouterr().err
    assert "window built" in err
    assert ".test_tagged_logger_includes_caller]" in err
    assert "INFO" in err


def test_setup_twice_does_not_duplicate_handlers(restore_logging):
    logger = setup_tagged_logger("band_mean.tests.twice", logging.INFO)
    logger = setup_tagged_logger("band_mean.tests.twice", logging.ERROR)
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.ERROR


def test_global_level_applies_to_new_loggers(restore_logging):
    configure_global_logging(logging.ERROR)
    logger = setup_tagged_logger("band_mean.tests.global_level")
    assert logger.level == logging.ERROR


def test_configure_and_reset():
    config.configure(sizes=[10, 20], half_bandwidth=4, repeats=3, atol=1e-6)
    settings = config.get_settings()
    assert settings['sizes'] == (10, 20)
    assert settings['half_bandwidth'] == 4
    assert settings['repeats'] == 3
    assert settings['atol'] == 1e-6
    config.reset()
    assert config.get_settings()['sizes'] == (512, 1024, 2048)


def test_configure_rejects_zero_repeats():
    with pytest.raises(ValueError):
        config.configure(repeats=0)


@pytest.mark.parametrize("level,expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    (" info ", logging.INFO),
    ("30", 30),
    (logging.ERROR, logging.ERROR),
])
def test_level_names_and_numbers(restore_logging, level, expected):
    logger = setup_tagged_logger("band_mean.tests.level_names", level)
    assert logger.level == expected
    assert logger.handlers[0].level == expected


@pytest.mark.parametrize("level", ["loud", "   ", True])
def test_unknown_level_is_rejected(restore_logging, level):
    with pytest.raises(InvalidArgument):
        setup_tagged_logger("band_mean.tests.bad_level", level)


def test_environment_level_is_used_when_none_given(monkeypatch, restore_logging):
    monkeypatch.setenv(tagged.LOG_LEVEL_ENV, "debug")
    logger = setup_tagged_logger("band_mean.tests.env_level")
    assert logger.level == logging.DEBUG


def test_global_level_wins_over_environment(monkeypatch, restore_logging):
    monkeypatch.setenv(tagged.LOG_LEVEL_ENV, "debug")
    configure_global_logging("error")
    logger = setup_tagged_logger("band_mean.tests.global_over_env")
    assert logger.level == logging.ERROR


def test_default_level_is_warning(monkeypatch, restore_logging):
    monkeypatch.delenv(tagged.LOG_LEVEL_ENV, raising=False)
    monkeypatch.setattr(logging.getLogger(), "level", logging.NOTSET)
    logger = setup_tagged_logger("band_mean.tests.default_level")
    assert logger.level == logging.WARNING


def test_global_level_leaves_other_libraries_alone(restore_logging):
    other = logging.getLogger("some_other_library.fonts")
    other.setLevel(logging.WARNING)
    ours = setup_tagged_logger("band_mean.tests.scoped", logging.WARNING)

    configure_global_logging(logging.DEBUG)

    assert ours.level == logging.DEBUG
    assert ours.handlers[0].level == logging.DEBUG
    assert other.level == logging.WARNING


def test_records_are_not_repeated_through_root(capsys, restore_logging):
    root = logging.getLogger()
    handler = logging.StreamHandler()
    root.addHandler(handler)
    try:
        logger = setup_tagged_logger("band_mean.tests.no_repeat", logging.INFO)
        logger.info("cell measured")
    finally:
        root.removeHandler(handler)
    assert capsys.readouterr().err.count("cell measured") == 1
