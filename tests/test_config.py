import pytest

from nasa_explorer.config import DEFAULT_API_KEY, DEFAULT_BASE_URL, load_config, redact_secret


def test_defaults():
    config = load_config({})
    assert config.client.api_key == DEFAULT_API_KEY
    assert config.client.uses_demo_key
    assert config.client.base_url == DEFAULT_BASE_URL
    assert config.client.timeout == 30.0
    assert config.client.retries == 3
    assert config.client.retry_delay == 1.0
    assert config.cache.ttl == 3600.0
    assert config.cache.max_size == 100
    assert config.log_level is None


def test_environment_overrides():
    config = load_config(
        {
            "NASA_API_KEY": " abcdef123456 ",
            "NASA_EXPLORER_BASE_URL": "http://localhost:8080/",
            "NASA_EXPLORER_TIMEOUT": "5",
            "NASA_EXPLORER_RETRIES": "0",
            "NASA_EXPLORER_RETRY_DELAY": "0.25",
            "NASA_EXPLORER_CACHE_TTL": "60",
            "NASA_EXPLORER_CACHE_SIZE": "10",
            "NASA_EXPLORER_LOG_LEVEL": "DEBUG",
        }
    )
    assert config.client.api_key == "abcdef123456"
    assert not config.client.uses_demo_key
    assert config.client.base_url == "http://localhost:8080"
    assert config.client.timeout == 5.0
    assert config.client.retries == 1
    assert config.client.retry_delay == 0.25
    assert config.cache.ttl == 60.0
    assert config.cache.max_size == 10
    assert config.log_level == "DEBUG"


def test_blank_key_falls_back_to_demo():
    assert load_config({"NASA_API_KEY": "   "}).client.api_key == DEFAULT_API_KEY


@pytest.mark.parametrize("value, message", [("soon", "must be numeric"), ("-1", "must not be negative")])
def test_invalid_numbers(value, message):
    with pytest.raises(ValueError, match=message):
        load_config({"NASA_EXPLORER_TIMEOUT": value})


def test_describe_masks_key():
    summary = load_config({"NASA_API_KEY": "abcdef123456"}).describe()
    assert summary["api_key"] == "abcd****"
    assert "abcdef123456" not in repr(summary)


@pytest.mark.parametrize(
    "value, keep, expected",
    [(None, 4, "<redacted>"), ("", 4, "<redacted>"), ("abc", 4, "***"), ("abcdefgh", 2, "ab****")],
)
def test_redact_secret(value, keep, expected):
    assert redact_secret(value, keep=keep) == expected
