import pytest

from tagstream.logger import configure_logging, get_logger


def test_get_logger_binds_context():
    log = get_logger("tagstream.test").bind(label="x")
    assert hasattr(log, "info")


@pytest.mark.parametrize("level,fmt", [("LOUD", "json"), ("INFO", "xml")])
def test_configure_logging_rejects_unknown_options(level, fmt):
    with pytest.raises(ValueError):
        configure_logging(level, fmt)
