# =============================================
# File: tests/test_config.py
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

from ttl_lru_service.domain.errors import InvalidCapacityError
from ttl_lru_service.main import create_app
from ttl_lru_service.utils.config import DEFAULT_CAPACITY, DEFAULT_PORT, Settings, get_settings

def test_defaults(monkeypatch):
    for name in ("CACHE_CAPACITY", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "HOST", "PORT"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.capacity == DEFAULT_CAPACITY == 1024
    assert s.port == DEFAULT_PORT == 8080
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CACHE_CAPACITY", "12")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "9000")
    s = get_settings()
    assert s.capacity == 12
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.log_level == "DEBUG"
    assert s.port == 9000

def test_bad_integer_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("CACHE_CAPACITY", "lots")
    assert get_settings().capacity == DEFAULT_CAPACITY

@pytest.mark.parametrize("capacity", [0, -3])
def test_non_positive_capacity_is_fatal_at_app_creation(capacity):
    with pytest.raises(InvalidCapacityError):
        create_app(Settings(capacity=capacity))
