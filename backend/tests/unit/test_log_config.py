"""Unit tests for the per-category logging setup."""

import logging

from care_sync.config import Settings
from care_sync.infrastructure.logging import setup_logging


def test_category_levels_follow_settings():
    settings = Settings(_env_file=None, log_level_sync="DEBUG", log_level_http="ERROR")

    applied = setup_logging(settings)

    assert applied["care_sync.application.services"] == logging.DEBUG
    assert applied["httpx"] == logging.ERROR
    assert logging.getLogger("care_sync.application.services.mutation_executor").getEffectiveLevel() == logging.DEBUG


def test_unknown_level_name_means_info():
    applied = setup_logging(Settings(_env_file=None, log_level="chatty"))
    assert applied["root"] == logging.INFO
