# tests/test_config.py

import pytest

from product_chat.config import Settings
import product_chat.exceptions as ex


def test_settings_from_env(monkeypatch):
  monkeypatch.setenv("PRODUCTS_API_URL", "http://catalog.test/products")
  monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
  monkeypatch.setenv("CATALOG_TIMEOUT", "2.5")
  monkeypatch.setenv("PORT", "8080")
  monkeypatch.delenv("GENERATION_MODEL", raising=False)
  monkeypatch.delenv("OPENAI_BASE_URL", raising=False)

  settings = Settings.from_env()

  assert settings.products_api_url == "http://catalog.test/products"
  assert settings.openai_api_key == "sk-test"
  assert settings.openai_base_url is None
  assert settings.generation_model == "gpt-4o-mini"
  assert settings.catalog_timeout == 2.5
  assert settings.port == 8080
  assert settings.app_env == "testing"
  settings.validate_required()


def test_missing_settings_are_named():
  settings = Settings(products_api_url=None, openai_api_key="")
  assert settings.missing_required() == ["PRODUCTS_API_URL", "OPENAI_API_KEY"]
  with pytest.raises(ex.ConfigurationError) as exc_info:
    settings.validate_required()
  assert "PRODUCTS_API_URL" in str(exc_info.value)
  assert "OPENAI_API_KEY" in str(exc_info.value)


def test_blank_values_fall_back_to_defaults(monkeypatch):
  monkeypatch.setenv("CATALOG_TIMEOUT", "")
  monkeypatch.setenv("PORT", "  ")
  monkeypatch.setenv("GENERATION_MODEL", "")

  settings = Settings.from_env()

  assert settings.catalog_timeout == 10.0
  assert settings.port == 5000
  assert settings.generation_model == "gpt-4o-mini"


@pytest.mark.parametrize("name, value", [("CATALOG_TIMEOUT", "ten"), ("PORT", "80.5")])
def test_malformed_number_names_the_variable(monkeypatch, name, value):
  monkeypatch.setenv(name, value)
  with pytest.raises(ex.ConfigurationError) as exc_info:
    Settings.from_env()
  assert name in str(exc_info.value)
