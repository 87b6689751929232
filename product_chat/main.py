# product_chat/main.py

from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from product_chat.catalog_cache import CatalogCache
from product_chat.chat_service import INVALID_PROMPT_MESSAGE, answer_query
from product_chat.config import get_settings
from product_chat.generator import GenerationEngine
from product_chat.models import ChatRequest, ChatResponse
import product_chat.exceptions as ex

from product_chat.logger import configure_logging, get_logger
configure_logging()

log = get_logger(__name__)
log.info("FastAPI application is starting...")


@asynccontextmanager
async def lifespan(app: FastAPI):
  # Refuse to start without the catalog URL and model key
  settings = get_settings()
  settings.validate_required()
  log.info(f"Products API: {settings.products_api_url}")
  log.info(f"Generation model: {settings.generation_model}")
  yield


app = FastAPI(title="Product Chatbot API",
              lifespan=lifespan,
              description="Answers shopping questions with a generative model grounded on a cached product catalog.",
              version="1.0.0")

app.add_middleware(
  CORSMiddleware,
  allow_origins=["*"],
  allow_methods=["*"],
  allow_headers=["*"],
)


@lru_cache()
def get_catalog_cache() -> CatalogCache:
  """Single cache instance shared by every request."""
  settings = get_settings()
  return CatalogCache(settings.products_api_url, timeout=settings.catalog_timeout)


@lru_cache()
def get_generation_engine() -> GenerationEngine:
  settings = get_settings()
  return GenerationEngine.from_credentials(settings.openai_api_key, settings.generation_model, settings.openai_base_url)


@app.post("/api/chat", response_model=ChatResponse)
def chat(
  request: ChatRequest,
  cache: CatalogCache = Depends(get_catalog_cache),
  engine: GenerationEngine = Depends(get_generation_engine),
  ):
  """
  Answer a product question using the cached catalog as context.
  Returns the generated text, an estimated token count and the number of products used.
  """
  log.info("/api/chat endpoint called")
  try:
    return answer_query(request.prompt, cache, engine)
  except ex.ValidationError as e:
    log.warning(f"[API] Rejected prompt: {e}")
    raise HTTPException(status_code=400, detail=str(e))
  except ex.FetchError as e:
    log.error(f"[API] Catalog fetch failed (status={e.status}, reason={e.reason}): {e.message}")
    raise HTTPException(status_code=500, detail=str(e))
  except ex.GenerationError as e:
    log.error(f"[API] Generation failed: {e}")
    raise HTTPException(status_code=500, detail=str(e))


@app.get("/", response_class=PlainTextResponse)
def root():
  return "Product Chatbot API is running"


@app.get("/health")
def healthcheck():
  return {"status": "ok"}


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
  log.warning(f"[API] Malformed request body on {request.url.path}: {exc.errors()}")
  return JSONResponse(status_code=400, content={"detail": INVALID_PROMPT_MESSAGE})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
  log.error(f"Unhandled exception: {exc}", exc_info=True)
  return JSONResponse(
    status_code=500,
    content={"detail": "Internal Server Error"},
  )
