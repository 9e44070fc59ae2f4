"""FastAPI dependencies: caller resolution, access guards and the notifier."""

from fastapi import Depends, HTTPException, Request

from storefront.identity.port import Caller
from storefront.notifications.notifier import Notifier


async def get_caller(request: Request) -> Caller:
    return request.app.state.identity.resolve(request.headers)


async def require_user(caller: Caller = Depends(get_caller)) -> Caller:
    if not caller.is_authenticated:
        raise HTTPException(status_code=401, detail="Please login to continue")
    return caller


async def require_admin(caller: Caller = Depends(require_user)) -> Caller:
    if not caller.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return caller


async def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier
