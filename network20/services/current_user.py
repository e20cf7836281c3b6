"""Current-user resolution."""

from network20.schemas.auth import Anonymous, Authenticated, AuthUser, CurrentUser, LocalPointer
from network20.schemas.profile import Profile


def resolve_current_user(
    remote_enabled: bool,
    auth_user: AuthUser | None,
    auth_profile: Profile | None,
    local_pointer: str | None,
) -> CurrentUser:
    """Decide who the current user is.

    A signed-in identity always wins and its own profile is the current
    profile, even when it has none yet. The device-local pointer is only
    consulted when the remote backend is off or nobody is signed in.

    Args:
        remote_enabled: Whether the remote backend is active.
        auth_user: Signed-in identity, if any.
        auth_profile: Profile owned by `auth_user`, if any.
        local_pointer: Profile ID stored on the device, if any.

    Returns:
        CurrentUser: Authenticated, LocalPointer or Anonymous.
    """
    if remote_enabled and auth_user is not None:
        return Authenticated(auth_user=auth_user, profile=auth_profile)
    if local_pointer:
        return LocalPointer(profile_id=local_pointer)
    return Anonymous()
