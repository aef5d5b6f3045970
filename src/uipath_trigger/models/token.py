from typing import TypedDict


class TokenData(TypedDict):
    """TypedDict for token data structure."""

    access_token: str
    token_type: str
    expires_in: int
    scope: str


class AccessTokenData(TypedDict, total=False):
    """TypedDict for access token data structure."""

    sub: str
    prt_id: str
    client_id: str
    exp: float
