"""FastAPI routes for account registration and the current caller."""

from fastapi import APIRouter, BackgroundTasks, Depends
from protean.utils.globals import current_domain

from storefront.api.deps import get_notifier, require_user
from storefront.api.schemas import RegisterUserRequest, UserIdResponse
from storefront.identity.port import Caller
from storefront.identity.user.registration import RegisterUser
from storefront.identity.user.user import UserRole
from storefront.notifications.kind import NotificationKind
from storefront.notifications.notifier import Notifier
from storefront.shared.email import normalize_email

user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(
    body: RegisterUserRequest,
    background_tasks: BackgroundTasks,
    notifier: Notifier = Depends(get_notifier),
) -> UserIdResponse:
    """Register a customer account. Administrators are created from the back office."""
    command = RegisterUser(
        name=body.name,
        email=body.email,
        phone=body.phone,
        address=body.address,
        role=UserRole.CUSTOMER.value,
    )
    user_id = current_domain.process(command, asynchronous=False)
    background_tasks.add_task(
        notifier.notify,
        NotificationKind.WELCOME,
        normalize_email(body.email),
        {"name": body.name},
    )
    return UserIdResponse(user_id=user_id)


@user_router.get("/me")
async def whoami(caller: Caller = Depends(require_user)) -> dict:
    return {"user_id": caller.user_id, "name": caller.name, "email": caller.email, "role": caller.role}
