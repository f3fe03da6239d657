"""Per-request wiring of the Health Hub client."""
from typing import AsyncIterator, Optional

import httpx
from fastapi import Depends, Header, HTTPException

from health_hub import HealthHubClient, Session

from .config import Settings, get_settings


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for backend calls; None means the default network transport."""
    return None


async def get_anonymous_client(
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
) -> AsyncIterator[HealthHubClient]:
    """Client without credentials, for registration and login."""
    async with HealthHubClient(
        base_url=settings.api_url,
        session=Session(),
        timeout=settings.request_timeout,
        transport=transport,
    ) as client:
        yield client


async def get_client(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
) -> AsyncIterator[HealthHubClient]:
    """Client carrying the caller's bearer token through to the backend."""
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail="Missing bearer token")

    async with HealthHubClient(
        base_url=settings.api_url,
        session=Session(token=token),
        timeout=settings.request_timeout,
        transport=transport,
    ) as client:
        yield client
