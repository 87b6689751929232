# product_chat/exceptions.py

from typing import Optional


class ChatAssistantException(Exception):
  """All assistant errors"""
  pass

class ConfigurationError(ChatAssistantException):
  """Required setting missing at startup"""
  pass

class ValidationError(ChatAssistantException):
  """User query absent, not a string or blank"""
  pass

class FetchError(ChatAssistantException):
  """Catalog source unreachable, bad HTTP status or malformed payload"""
  def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None, reason: Optional[str] = None):
    self.status = status
    self.body = body
    self.reason = reason
    self.message = message
    super().__init__(self.message)

class GenerationError(ChatAssistantException):
  """Text generation call failed or returned nothing"""
  pass
