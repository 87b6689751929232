# product_chat/config.py

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from product_chat.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()


def _env_number(name, cast, default):
  """Read a numeric variable; blank counts as unset."""
  raw = (os.getenv(name) or "").strip()
  if not raw:
    return default
  try:
    return cast(raw)
  except ValueError:
    raise ConfigurationError(f"Invalid value for {name}: {raw!r}")


class Settings(BaseModel):
  products_api_url: Optional[str] = None
  openai_api_key: Optional[str] = None
  openai_base_url: Optional[str] = None
  generation_model: str = "gpt-4o-mini"
  catalog_timeout: float = 10.0
  port: int = 5000
  app_env: str = "development"

  @classmethod
  def from_env(cls) -> "Settings":
    """Build settings from the process environment (and .env)."""
    return cls(
      products_api_url=os.getenv("PRODUCTS_API_URL") or None,
      openai_api_key=os.getenv("OPENAI_API_KEY") or None,
      openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
      generation_model=os.getenv("GENERATION_MODEL") or "gpt-4o-mini",
      catalog_timeout=_env_number("CATALOG_TIMEOUT", float, 10.0),
      port=_env_number("PORT", int, 5000),
      app_env=os.getenv("APP_ENV", "development"),
    )

  def missing_required(self) -> List[str]:
    missing = list()
    if not self.products_api_url:
      missing.append("PRODUCTS_API_URL")
    if not self.openai_api_key:
      missing.append("OPENAI_API_KEY")
    return missing

  def validate_required(self) -> None:
    """Raise ConfigurationError naming every required variable that is unset."""
    missing = self.missing_required()
    if missing:
      raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


@lru_cache()
def get_settings() -> Settings:
  return Settings.from_env()
