# product_chat/generator.py

from typing import Optional

from openai import OpenAI, OpenAIError

from product_chat.logger import get_logger
from product_chat.prompt_builder import MAX_OUTPUT_TOKENS, TEMPERATURE
import product_chat.exceptions as ex

log = get_logger(__name__)


class GenerationEngine:
  """Thin wrapper over an OpenAI-compatible chat completions endpoint."""

  def __init__(self, client: OpenAI, model: str,
               max_output_tokens: int = MAX_OUTPUT_TOKENS, temperature: float = TEMPERATURE):
    self.client = client
    self.model = model
    self.max_output_tokens = max_output_tokens
    self.temperature = temperature

  @classmethod
  def from_credentials(cls, api_key: str, model: str, base_url: Optional[str] = None) -> "GenerationEngine":
    return cls(OpenAI(api_key=api_key, base_url=base_url), model)

  def generate(self, prompt: str) -> str:
    """
    Send the prompt and return the generated text.

    Raises:
      GenerationError: The API call failed or the model produced no text
    """
    log.info(f"Requesting generation from '{self.model}' (prompt length={len(prompt)})")
    try:
      completion = self.client.chat.completions.create(
        model=self.model,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=self.max_output_tokens,
        temperature=self.temperature,
      )
    except OpenAIError as e:
      log.error(f"[GENERATION] Model '{self.model}' call failed. Exception: {e}")
      raise ex.GenerationError(f"Generation failed: {e}")

    if not completion.choices:
      log.error(f"[GENERATION] Model '{self.model}' returned no choices")
      raise ex.GenerationError("Generation returned no choices")

    text = completion.choices[0].message.content
    if not text or not text.strip():
      log.error(f"[GENERATION] Model '{self.model}' returned an empty response")
      raise ex.GenerationError("Generation returned an empty response")

    log.info(f"Generation complete ({len(text.split())} words)")
    return text
