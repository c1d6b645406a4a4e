import logging
import os

from tripdistance.api.app import LOCAL_ORIGIN_REGEX, cors_options
from tripdistance.config.settings import ApiSettings, Settings
from tripdistance.core.env import load_dotenv_if_present
from tripdistance.core.logging import configure_logging


def test_env_file_override_is_loaded_without_clobbering(monkeypatch, tmp_path):
    env_path = tmp_path / "geo.env"
    env_path.write_text("TRIPDISTANCE_SAMPLE_KEY=from-file\nTRIPDISTANCE_SAMPLE_KEEP=from-file\n", encoding="utf-8")
    # Register both names for cleanup, then start with only one of them set.
    monkeypatch.setenv("TRIPDISTANCE_SAMPLE_KEY", "x")
    monkeypatch.delenv("TRIPDISTANCE_SAMPLE_KEY")
    monkeypatch.setenv("TRIPDISTANCE_SAMPLE_KEEP", "from-process")
    monkeypatch.setenv("TRIPDISTANCE_ENV_FILE", str(env_path))

    load_dotenv_if_present.cache_clear()
    try:
        assert load_dotenv_if_present() == env_path.resolve()
    finally:
        load_dotenv_if_present.cache_clear()

    assert os.environ["TRIPDISTANCE_SAMPLE_KEY"] == "from-file"
    assert os.environ["TRIPDISTANCE_SAMPLE_KEEP"] == "from-process"


def test_missing_env_file_override_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("TRIPDISTANCE_ENV_FILE", str(tmp_path / "absent.env"))
    load_dotenv_if_present.cache_clear()
    try:
        assert load_dotenv_if_present() is None
    finally:
        load_dotenv_if_present.cache_clear()


def test_configure_logging_uses_given_settings():
    configure_logging(Settings(app={"log_level": "debug"}))
    try:
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        configure_logging(Settings())
    assert logging.getLogger().level == logging.INFO


def test_cors_options():
    assert cors_options(ApiSettings())["allow_origin_regex"] == LOCAL_ORIGIN_REGEX
    explicit = cors_options(ApiSettings(cors_origins=["https://planner.example.test"]))
    assert explicit["allow_origins"] == ["https://planner.example.test"]
    assert explicit["allow_origin_regex"] is None
    assert cors_options(ApiSettings(cors_allow_local=False)) is None
