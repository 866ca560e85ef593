from typing import Any, Callable


def is_privileged_user(user: Any) -> bool:
    return bool(
        getattr(user, "is_authenticated", False)
        and (getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))
    )


def admin_check(request) -> Callable[[], bool]:
    """Credential predicate handed to services for admin-only operations."""
    user = getattr(request, "user", None)
    return lambda: is_privileged_user(user)


def owner_id(request) -> int:
    return int(request.user.id)
