import httpx
import pytest
from fastapi.testclient import TestClient

from api.deps import get_caches, get_http_client
from config import get_settings
from main import app
from services.cache import build_cache_registry


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstream:
    """httpx MockTransport handler: routes by host + path, records every request."""

    def __init__(self):
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, response) -> None:
        # `response` is an httpx.Response, an exception instance, or a callable(request)
        self.routes[url] = response

    def calls(self, url: str) -> int:
        return sum(1 for r in self.requests if f"{r.url.host}{r.url.path}" == url)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(f"{request.url.host}{request.url.path}")
        if route is None:
            return httpx.Response(404, json={"error": "no route"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def http_client(upstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def caches(clock):
    return build_cache_registry(get_settings(), clock=clock)


@pytest.fixture
def client(http_client, caches):
    app.dependency_overrides[get_http_client] = lambda: http_client
    app.dependency_overrides[get_caches] = lambda: caches
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


RECITATIONS_URL = "api.quran.com/api/v4/resources/recitations"

RECITATIONS_PAYLOAD = {
    "recitations": [
        {
            "id": 7,
            "reciter_name": "Mishari Rashid al-`Afasy",
            "style": None,
            "translated_name": {"name": "Mishari Rashid al-`Afasy", "language_name": "english"},
        },
        {
            "id": 2,
            "reciter_name": "AbdulBaset AbdulSamad",
            "style": "Murattal",
            "translated_name": {"name": "AbdulBaset AbdulSamad", "language_name": "english"},
        },
    ]
}


def chapter_payload(chapter_id: int = 1, verses_count: int = 7) -> dict:
    return {
        "id": chapter_id,
        "revelation_place": "makkah",
        "revelation_order": 5,
        "bismillah_pre": False,
        "name_simple": "Al-Fatihah",
        "name_complex": "Al-Fātiĥah",
        "name_arabic": "الفاتحة",
        "verses_count": verses_count,
        "pages": [1, 1],
        "translated_name": {"language_name": "english", "name": "The Opener"},
    }


def verse_payload(verse_number: int, surah: int = 1, page: int = 1, lines: tuple[int, ...] = (2,)) -> dict:
    return {
        "id": verse_number,
        "verse_key": f"{surah}:{verse_number}",
        "verse_number": verse_number,
        "text_uthmani": "بِسْمِ",
        "juz_number": 1,
        "page_number": page,
        "translations": [{"resource_id": 131, "text": f"translation {verse_number}"}],
        "words": [
            {
                "id": i,
                "position": i,
                "char_type_name": "word",
                "text_uthmani": "كلمة",
                "code_v2": "ﱁ",
                "page_number": page,
                "line_number": line,
                "translation": {"text": f"w{i}"},
            }
            for i, line in enumerate(lines, start=1)
        ],
    }
