# product_chat/chat_service.py

from typing import Any

from product_chat.catalog_cache import CatalogCache
from product_chat.generator import GenerationEngine
from product_chat.models import ChatResponse
from product_chat.prompt_builder import build_prompt
from product_chat.logger import get_logger
import product_chat.exceptions as ex

log = get_logger(__name__)

INVALID_PROMPT_MESSAGE = "Prompt is required and must be a non-empty string."
TOKENS_PER_WORD = 1.33


def validate_query(prompt: Any) -> str:
  if not isinstance(prompt, str) or not prompt.strip():
    raise ex.ValidationError(INVALID_PROMPT_MESSAGE)
  return prompt


def estimate_tokens(text: str) -> float:
  """Word count x 1.33, rounded to 2 decimals."""
  return round(len(text.split()) * TOKENS_PER_WORD, 2)


def answer_query(prompt: Any, cache: CatalogCache, engine: GenerationEngine) -> ChatResponse:
  """
  Run the full pipeline for one query: catalog, prompt, generation.

  Args:
    prompt (Any): Raw user query as received
    cache (CatalogCache): Shared catalog cache
    engine (GenerationEngine): Text generation backend

  Returns:
    ChatResponse: Generated text, its token estimate and the catalog size used

  Raises:
    ValidationError, FetchError, GenerationError. Nothing is returned on failure.
  """
  query = validate_query(prompt)

  products = cache.get()
  log.info(f"Building prompt for query '{query}' with {len(products)} products")
  text = engine.generate(build_prompt(query, products))

  return ChatResponse(
    response=text,
    token_estimate=estimate_tokens(text),
    products_used=len(products),
  )
