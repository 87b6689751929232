# tests/test_generator.py

from types import SimpleNamespace

import pytest
from openai import OpenAIError

from product_chat.generator import GenerationEngine
import product_chat.exceptions as ex


class FakeCompletions:
  def __init__(self, content=None, error=None, choices=True):
    self.content = content
    self.error = error
    self.choices = choices
    self.requests = list()

  def create(self, **kwargs):
    self.requests.append(kwargs)
    if self.error:
      raise self.error
    if not self.choices:
      return SimpleNamespace(choices=[])
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def make_engine(completions):
  client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
  return GenerationEngine(client, "test-model")


def test_generate_sends_prompt_with_fixed_limits():
  completions = FakeCompletions(content="- Sneaker, $20")
  engine = make_engine(completions)

  assert engine.generate("hello prompt") == "- Sneaker, $20"
  request = completions.requests[0]
  assert request["model"] == "test-model"
  assert request["messages"] == [{"role": "user", "content": "hello prompt"}]
  assert request["max_tokens"] == 200
  assert request["temperature"] == 0.5


def test_api_failure_raises_generation_error():
  engine = make_engine(FakeCompletions(error=OpenAIError("quota exceeded")))
  with pytest.raises(ex.GenerationError) as exc_info:
    engine.generate("prompt")
  assert "quota exceeded" in str(exc_info.value)


@pytest.mark.parametrize("content", [None, "", "  \n"])
def test_empty_output_raises_generation_error(content):
  engine = make_engine(FakeCompletions(content=content))
  with pytest.raises(ex.GenerationError):
    engine.generate("prompt")


def test_no_choices_raises_generation_error():
  engine = make_engine(FakeCompletions(choices=False))
  with pytest.raises(ex.GenerationError):
    engine.generate("prompt")
