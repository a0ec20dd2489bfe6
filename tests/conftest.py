# tests/conftest.py
import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ---- 測試期環境變數（先於 app 載入）----
os.environ.setdefault("ENV", "test")
os.environ.setdefault("AUTH_PROVIDER", "local")

from app.main import app  # noqa: E402
from app.core.config import Settings, get_settings  # noqa: E402
from app.core.security import create_local_token  # noqa: E402

TEST_SECRET = "test-secret-key-0123456789-abcdefghijklmnop"


def make_settings(**overrides) -> Settings:
    """測試用設定：不讀 .env，金鑰全部明確指定，避免被外部環境變數影響。"""
    values = dict(
        ENV="test",
        AUTH_PROVIDER="local",
        SECRET_KEY=TEST_SECRET,
        OPENAI_API_KEY="sk-test",
        GOOGLE_API_KEY="google-test-key",
        GOOGLE_CX="cx-test",
        SENTRY_DSN=None,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeUpstream:
    """取代上游呼叫（OpenAI / Google）的 async 假函式，記錄呼叫次數。"""

    def __init__(self, result=None):
        self.result = result
        self.exc = None
        self.calls = []

    async def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def use_settings():
    """安裝一份測試設定到 dependency_overrides；可在測試內重複呼叫換設定。"""
    def _use(**overrides) -> Settings:
        s = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: s
        return s

    yield _use
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def settings(use_settings) -> Settings:
    return use_settings()


@pytest.fixture
def auth_headers(settings):
    token = create_local_token(settings, "user-123", email="taster@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fake_vision(monkeypatch):
    # patch 到路由實際引用的位置
    fake = FakeUpstream(result='{"name": "Chateau X"}')
    monkeypatch.setattr("app.api.endpoints.wine.request_label_analysis", fake, raising=True)
    return fake


@pytest.fixture
def fake_search(monkeypatch):
    fake = FakeUpstream(result="https://img.example.com/bottle.jpg")
    monkeypatch.setattr("app.api.endpoints.wine.search_first_image", fake, raising=True)
    return fake


@pytest_asyncio.fixture
async def client():
    """使用 ASGITransport 直接掛載 app，不需啟動伺服器。"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def settings_factory():
    """不安裝到 app 的設定產生器（單元測試用）。"""
    return make_settings


@pytest.fixture
def log_messages():
    """收集 loguru WARNING 以上的訊息。"""
    from loguru import logger

    messages = []
    sink_id = logger.add(lambda m: messages.append(str(m)), level="WARNING", format="{message}")
    yield messages
    logger.remove(sink_id)
