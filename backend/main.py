import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_settings
from errors import QuranServiceError
from services.cache import build_cache_registry
from api.verses import router as verses_router
from api.partitions import router as partitions_router
from api.quran import router as quran_router
from api.radio import router as radio_router
from api.tts import router as tts_router
from api.memorize import router as memorize_router
from api.learn import router as learn_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Quranic Learn backend...")
    app.state.http_client = httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS)
    app.state.caches = build_cache_registry(settings)
    logger.info("Quranic Learn backend ready")
    yield
    # Shutdown
    await app.state.http_client.aclose()
    logger.info("Quranic Learn backend shut down")


app = FastAPI(
    title="Quranic Learn API",
    description="Verse indexing and cached Quran content proxies",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(QuranServiceError)
async def quran_service_error_handler(request: Request, exc: QuranServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"status": "error", "message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors())
    return JSONResponse(status_code=400, content={"status": "error", "message": errors})


# REST routes
app.include_router(verses_router)
app.include_router(partitions_router)
app.include_router(quran_router)
app.include_router(radio_router)
app.include_router(tts_router)
app.include_router(memorize_router)
app.include_router(learn_router)


# Health check
@app.get("/health")
async def health():
    return {"status": "ok", "service": "quranic-learn"}
