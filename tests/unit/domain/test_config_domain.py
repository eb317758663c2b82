from __future__ import annotations

"""
Unit tests for the configuration domain.

Verifies default values, options construction and metadata time handling.
"""

import dataclasses

import pytest

from treels.domain.config import LISTING_FLAGS, ListingOptions, get_default_config
from treels.domain.errors import ListingError, UnsupportedTimeError
from treels.domain.metadata import Metadata


def test_default_config_has_every_flag_disabled():
    config = get_default_config()

    for flag in LISTING_FLAGS:
        assert config[flag] is False
    assert config["debug"] is False
    assert config["log_file"] == ""


def test_listing_options_from_config():
    config = get_default_config()
    config.update({"all": True, "long": True, "debug": True})

    options = ListingOptions.from_config(config)

    assert options.all is True
    assert options.include_hidden is True
    assert options.long is True
    assert options.recursive is False


def test_listing_options_are_immutable():
    options = ListingOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.recursive = True  # type: ignore[misc]


def test_metadata_without_time_raises_unsupported():
    with pytest.raises(UnsupportedTimeError) as exc_info:
        Metadata(mtime=None).modified()
    assert isinstance(exc_info.value, ListingError)


def test_metadata_with_time_returns_datetime(make_metadata):
    modified = make_metadata().modified()
    assert (modified.month, modified.day, modified.hour, modified.minute) == (3, 5, 14, 7)
