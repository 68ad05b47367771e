from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SDK_SRC = BASE_DIR / "src"

sys.path.insert(0, str(SDK_SRC))

from printduka_sdk.config import ClientConfig  # noqa: E402
from printduka_sdk.http_client import HttpClient  # noqa: E402
from printduka_sdk.query_cache import QueryCache  # noqa: E402
from printduka_sdk.tracing import TraceContext  # noqa: E402

API = "https://api.example.com"


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance_ms(self, ms: float) -> None:
        self.value += ms / 1000


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=API, retries=2, retry_backoff_seconds=0)


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config, trace=TraceContext(), sleep=lambda _: None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> QueryCache:
    return QueryCache(ttl_seconds=60, now=clock)


def page(results: list[dict], count: int | None = None, summary: dict | None = None) -> dict:
    payload: dict = {
        "count": len(results) if count is None else count,
        "next": None,
        "previous": None,
        "results": results,
    }
    if summary is not None:
        payload["summary"] = summary
    return payload
