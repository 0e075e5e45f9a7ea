import httpx
from fastapi import Request

from services.cache import CacheRegistry


def get_http_client(request: Request) -> httpx.AsyncClient:
    # shared client created in the app lifespan
    return request.app.state.http_client


def get_caches(request: Request) -> CacheRegistry:
    return request.app.state.caches
