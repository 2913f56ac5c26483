"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .llm import ChatClient
from .routes import chat

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - owns the upstream chat client."""
    logger.info("Chat API URL: %s", settings.api_url)
    logger.info("Default model: %s", settings.model)
    if not settings.api_key:
        logger.warning("CHAT_API_KEY is not set; upstream requests will be rejected.")

    client = ChatClient(
        api_key=settings.api_key,
        api_url=settings.api_url,
        defaults=settings.generation_defaults(),
    )
    chat.set_chat_client(client)

    yield

    # Shutdown
    await client.close()
    logger.info("Chat client closed")


app = FastAPI(lifespan=lifespan)

app.include_router(chat.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
