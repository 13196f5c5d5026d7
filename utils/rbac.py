import logging

from django.contrib.auth import get_user_model

logger = logging.getLogger(__name__)


def _fetch_user_from_db(user):
    """Fetch a fresh copy of the user with only the fields RBAC needs.

    Returns None if the user is not authenticated or the lookup fails.
    """
    if not getattr(user, "is_authenticated", False):
        return None
    User = get_user_model()
    return User.objects.only("id", "is_admin", "is_superuser", "is_disabled").filter(pk=getattr(user, "pk", None)).first()


def is_admin(user) -> bool:
    """Admin check verified against the database.

    Only the ``is_admin`` flag and superuser status grant access; ``user_type``
    is a profile label and never does.
    """
    db_user = _fetch_user_from_db(user)
    if not db_user or db_user.is_disabled:
        return False
    return bool(db_user.is_superuser or db_user.is_admin)


def can_manage(user, owner_id) -> bool:
    """Owners manage their own rows; admins manage everything."""
    if not getattr(user, "is_authenticated", False):
        return False
    return str(user.pk) == str(owner_id) or is_admin(user)
