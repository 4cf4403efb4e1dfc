from session import InMemorySessionCache, SessionSettings
from service import create_app


def test_injected_empty_cache_is_shared():
    cache = InMemorySessionCache("rememberme")
    assert len(cache) == 0

    app = create_app(SessionSettings(secret_key="test-secret-key"), cache)

    assert app.state.session_cache is cache
    assert app.state.session_store.cache is cache


def test_fixture_cache_is_the_one_the_app_uses(app, cache):
    assert app.state.session_cache is cache
