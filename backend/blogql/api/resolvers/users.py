import logging

from ariadne import MutationType
from sqlalchemy.exc import IntegrityError

from blogql.api.context import RequestContext
from blogql.api.inputs import PasswordChangeInput, ProfileInput, parse_input
from blogql.core.exceptions import (
    AuthorizationError,
    DuplicateAccountError,
    IncorrectPasswordError,
    NotFoundError,
)
from blogql.core.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

mutation = MutationType()


def get_own_profile(context: RequestContext, user_id: int, field: str, action: str):
    """Authenticate, check the profile belongs to the caller, then load it.

    Ownership is decided by the signed id; the row is re-read so a deleted
    account yields NotFound.
    """
    claims = context.require_claims(
        "Unauthenticated", {field: f"Login first! to {action}"})

    if claims.id != user_id:
        raise AuthorizationError("Unauthorized", {
            field: f"You are not the owner of this profile! You can't {action}"
        })

    user = context.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("Not Found", {field: "User not exists"})
    return user


@mutation.field("updateProfile")
def resolve_update_profile(_, info, id, email, name):
    context: RequestContext = info.context
    user = get_own_profile(context, id, "updateProfile", "update this profile")
    data = parse_input(ProfileInput, email=email, name=name)

    if context.users.email_taken(data.email, exclude_id=user.id):
        raise DuplicateAccountError()

    try:
        user = context.users.update(user, name=data.name, email=data.email)
    except IntegrityError:
        raise DuplicateAccountError()

    logger.info(f"Profile {user.id} updated")
    return user


@mutation.field("removeProfile")
def resolve_remove_profile(_, info, id):
    context: RequestContext = info.context
    user = get_own_profile(context, id, "removeProfile", "delete this profile")

    # Cascades to the user's posts
    context.users.delete(user)
    logger.info(f"Profile {id} removed")
    return "Profile removed successfully"


@mutation.field("changePassword")
def resolve_change_password(_, info, id, old_password, new_password):
    context: RequestContext = info.context
    user = get_own_profile(context, id, "changePassword", "change password")
    data = parse_input(PasswordChangeInput, old_password=old_password, new_password=new_password)

    if not verify_password(data.old_password, user.password):
        raise IncorrectPasswordError()

    user = context.users.update(user, password=get_password_hash(data.new_password))
    logger.info(f"Password changed for user {user.id}")
    return user
