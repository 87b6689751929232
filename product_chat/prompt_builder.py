# product_chat/prompt_builder.py

from typing import Any, Mapping, Sequence

MAX_RESPONSE_WORDS = 40
MAX_OUTPUT_TOKENS = 200
TEMPERATURE = 0.5

# field -> placeholder used when the field is missing, null or a blank string
PRODUCT_PLACEHOLDERS = {
  "title": "Unnamed Product",
  "description": "No description",
  "price": "N/A",
  "category": "Uncategorized",
}

PRODUCT_TEMPLATE = (
  "Product: {title}\n"
  "Description: {description}\n"
  "Price: {price}\n"
  "Category: {category}"
)

PROMPT_TEMPLATE = (
  "[Respond in under {max_words} words]\n"
  "User Query: {query}\n"
  "\n"
  "Available Products ({product_count}):\n"
  "{catalog}\n"
  "\n"
  "Response Requirements:\n"
  "- Concise bullet points\n"
  "- Max {max_tokens} tokens\n"
  "- Prioritize most relevant products"
)


def render_field(product: Any, field: str) -> str:
  """
  Render one product field, falling back to its placeholder.

  Only missing, None and blank-string values are replaced, so a price of 0
  or a False flag shows up as-is.
  """
  value = product.get(field) if isinstance(product, Mapping) else None
  if value is None or (isinstance(value, str) and not value.strip()):
    return PRODUCT_PLACEHOLDERS[field]
  return str(value)


def render_product(product: Any) -> str:
  return PRODUCT_TEMPLATE.format(**{field: render_field(product, field) for field in PRODUCT_PLACEHOLDERS})


def build_product_context(products: Sequence[Any]) -> str:
  """Render every product, in input order, separated by a blank line."""
  return "\n\n".join(render_product(p) for p in products)


def describe_product_count(count: int) -> str:
  return f"{count} product available" if count == 1 else f"{count} products available"


def build_prompt(user_query: str, products: Sequence[Any]) -> str:
  """
  Build the single instruction string sent to the generation engine.

  Args:
    user_query (str): The user's natural-language question
    products (Sequence[Any]): Catalog snapshot, rendered in the given order

  Returns:
    str: Prompt carrying the query, the catalog and the output constraints
  """
  return PROMPT_TEMPLATE.format(
    max_words=MAX_RESPONSE_WORDS,
    query=user_query,
    product_count=describe_product_count(len(products)),
    catalog=build_product_context(products),
    max_tokens=MAX_OUTPUT_TOKENS,
  )
