"""Test the configuration module functionality."""

import pytest

from kspath.config import SEARCH_CONFIG, SearchConfig, parse_search_mode
from kspath.lib.algorithms.base import SearchMode


def test_search_config_defaults():
    """Test that the default configuration values are correct."""
    config = SearchConfig()

    assert config.mode == SearchMode.BIDIR
    assert config.k == 3
    assert config.cost_attr == "cost"


def test_global_config_instance():
    assert SEARCH_CONFIG.mode == SearchMode.BIDIR
    assert SEARCH_CONFIG.k == 3


@pytest.mark.parametrize(
    "value, expected",
    [
        (SearchMode.VANILLA, SearchMode.VANILLA),
        ("vanilla", SearchMode.VANILLA),
        ("BIDIR", SearchMode.BIDIR),
        (" Bidir ", SearchMode.BIDIR),
        (1, SearchMode.VANILLA),
        (2, SearchMode.BIDIR),
    ],
)
def test_parse_search_mode(value, expected):
    assert parse_search_mode(value) is expected


@pytest.mark.parametrize("value", ["astar", 0, 3, True, None, 1.0])
def test_parse_search_mode_invalid(value):
    with pytest.raises(ValueError, match="Unknown search mode"):
        parse_search_mode(value)


def test_from_dict():
    config = SearchConfig.from_dict({"mode": "vanilla", "k": 7, "cost_attr": "w"})
    assert config == SearchConfig(SearchMode.VANILLA, 7, "w")
    assert SearchConfig.from_dict(None) == SearchConfig()
    assert SearchConfig.from_dict({}) == SearchConfig()


@pytest.mark.parametrize(
    "data, message",
    [
        ([("mode", "bidir")], "must be a mapping"),
        ({"mode": "bidir", "depth": 2}, "Unknown search config keys: depth"),
        ({"k": -1}, "non-negative integer"),
        ({"k": "3"}, "non-negative integer"),
        ({"k": True}, "non-negative integer"),
        ({"cost_attr": ""}, "non-empty string"),
        ({"mode": "fast"}, "Unknown search mode"),
    ],
)
def test_from_dict_invalid(data, message):
    with pytest.raises(ValueError, match=message):
        SearchConfig.from_dict(data)


def test_to_dict():
    assert SearchConfig().to_dict() == {"mode": "bidir", "k": 3, "cost_attr": "cost"}
    config = SearchConfig(mode=2, k=0)
    assert config.mode is SearchMode.BIDIR
    assert SearchConfig.from_dict(config.to_dict()) == config
