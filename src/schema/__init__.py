from .schema import LoginRequest, ProfileUpdateRequest, PageResponse, StatusResponse

__all__ = [
    "LoginRequest",
    "ProfileUpdateRequest",
    "PageResponse",
    "StatusResponse",
]
