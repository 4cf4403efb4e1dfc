import pytest

from auth.auth import AuthConfig, AuthMode, BaseAuth, SessionAuth, OpaqueCredentialCheck, BaseCredentialCheck
from auth.schema import AuthResult


class TestBaseAuth:
    def test_authenticate_raises_not_implemented(self):
        auth = BaseAuth()
        with pytest.raises(NotImplementedError):
            auth.authenticate({})


class TestSessionAuth:
    def test_authenticated_payload(self):
        result = SessionAuth().authenticate({"username": "alice", "authenticated": True, "remember": False})

        assert result.is_authenticated
        assert result.credentials == "alice"
        assert result.strategy == "session"

    @pytest.mark.parametrize("payload", [
        None,
        {},
        {"username": "alice"},
        {"username": "alice", "authenticated": False},
        {"username": "alice", "authenticated": "true"},
    ])
    def test_unauthenticated_payloads(self, payload):
        result = SessionAuth().authenticate(payload)

        assert not result.is_authenticated
        assert result.credentials is None


class TestAuthConfig:
    def test_init(self):
        auth_config = AuthConfig()
        assert auth_config.auth_strategies == {}

    def test_register_auth_strategy(self):
        auth_config = AuthConfig()
        strategy = SessionAuth()

        auth_config.register_auth_strategy("session", strategy)
        auth_config.set_default_strategy("session")

        assert auth_config.auth_strategies["session"] is strategy
        assert auth_config.default_strategy is strategy

    def test_register_invalid_strategy(self):
        auth_config = AuthConfig()
        with pytest.raises(TypeError, match="must be an instance of BaseAuth"):
            auth_config.register_auth_strategy("invalid", "not an auth strategy")

    def test_unknown_default_strategy(self):
        with pytest.raises(KeyError):
            AuthConfig().set_default_strategy("missing")

    def test_default_strategy_not_configured(self):
        with pytest.raises(RuntimeError):
            AuthConfig().default_strategy


class TestCredentialCheck:
    @pytest.mark.asyncio
    async def test_base_check_not_implemented(self):
        with pytest.raises(NotImplementedError):
            await BaseCredentialCheck().acheck("alice", "x")

    @pytest.mark.asyncio
    async def test_opaque_check(self):
        check = OpaqueCredentialCheck()

        assert await check.acheck("alice", "x")
        assert await check.acheck("alice", None)
        assert not await check.acheck("   ", "x")


def test_auth_mode_values():
    assert AuthMode("optional") is AuthMode.OPTIONAL
    assert AuthResult.unauthenticated().is_authenticated is False
