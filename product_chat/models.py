# product_chat/models.py

from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
  # validated in chat_service.validate_query
  prompt: Any = None


class ChatResponse(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  response: str
  token_estimate: float = Field(alias="tokenEstimate")
  products_used: int = Field(alias="productsUsed")
