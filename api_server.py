from __future__ import annotations  # FastAPI server exposing the AI interview session API

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api import files, routes
from config.settings import settings
from storage.migrate import migrate


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):  # Ensure durable tables exist before serving
    migrate(settings.DB_PATH)
    logger.info("Session store ready at %s (max_questions=%d)", settings.DB_PATH, settings.MAX_QUESTIONS)
    yield


app = FastAPI(title="AI Interview Session API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins() or ["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(files.router)
app.include_router(routes.router)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:  # Liveness probe
    return "API is running..."


def main() -> None:  # Run the API with uvicorn on the configured port
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s :: %(message)s")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
