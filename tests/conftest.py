import logging

import pytest

from changekb.config import get_settings

CAB_DOCUMENT = (
    "Q: What is a CAB?\n"
    "A: A Change Advisory Board reviews RFCs.\n"
    "Q: What is lead time?\n"
    "A: Minimum notice required before a change window."
)

SETTINGS_ENV = (
    "CHANGEKB_SOURCE",
    "CHANGEKB_FILES_ROOT",
    "CHANGEKB_LOG_DIR",
    "CHANGEKB_CONFIDENCE_THRESHOLD",
    "CHANGEKB_MAX_KEYWORDS",
    "CHANGEKB_MAX_FALLBACK_ENTRIES",
    "CHANGEKB_POLL_INTERVAL",
    "CHANGEKB_EXTRACTOR",
    "MINERU_API_KEY",
)


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep configure_logging from attaching file/console handlers during tests"""
    logger = logging.getLogger("changekb")
    handler = logging.NullHandler()
    logger.addHandler(handler)
    yield
    logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Every test starts from default settings rooted in a temp directory"""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CHANGEKB_FILES_ROOT", str(tmp_path))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def cab_document():
    return CAB_DOCUMENT


@pytest.fixture
def cab_source(tmp_path):
    path = tmp_path / "faq.txt"
    path.write_text(CAB_DOCUMENT, encoding="utf-8")
    return path
