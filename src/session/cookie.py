import logging
from typing import Optional
from uuid import UUID

from fastapi import Request, Response
from fastapi_sessions.frontends.implementations import SessionCookie, CookieParameters
from fastapi_sessions.frontends.implementations.cookie import SameSiteEnum
from itsdangerous import BadData

from .config import SessionSettings

logger = logging.getLogger('rememberme.session.cookie')


class SessionIdCookie(SessionCookie):
    """
    Signed cookie carrying only the session id.

    Unlike the stock SessionCookie, the max age is chosen per response so the
    same cookie can be issued with either TTL class. Signatures are accepted
    for up to the extended TTL, the browser enforces the actual expiry.
    """

    def __init__(self, settings: SessionSettings):
        super().__init__(
            cookie_name=settings.cookie_name,
            identifier="session_cookie",
            auto_error=False,
            secret_key=settings.secret_key,
            cookie_params=settings.cookie_params(),
        )
        self.cookie_name = settings.cookie_name
        self.settings = settings

    def decode(self, signed_session_id: Optional[str]) -> Optional[UUID]:
        if not signed_session_id:
            return None
        try:
            return UUID(
                self.signer.loads(
                    signed_session_id,
                    max_age=self.settings.extended_ttl_ms // 1000,
                    return_timestamp=False,
                )
            )
        except (BadData, ValueError) as e:
            logger.info(f"Ignoring session cookie with invalid signature: {e}")
            return None

    def read(self, request: Request) -> Optional[UUID]:
        return self.decode(request.cookies.get(self.cookie_name))

    def encode(self, session_id: UUID) -> str:
        return str(self.signer.dumps(session_id.hex))

    def attach_to_response(self, response: Response, session_id: UUID, ttl_ms: Optional[int] = None) -> None:
        params: CookieParameters = self.settings.cookie_params(ttl_ms)
        response.set_cookie(
            key=self.cookie_name,
            value=self.encode(session_id),
            max_age=params.max_age,
            path=params.path,
            domain=params.domain,
            secure=params.secure,
            httponly=params.httponly,
            samesite=SameSiteEnum(params.samesite).value,
        )
