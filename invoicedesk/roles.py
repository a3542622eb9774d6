"""User roles.

Profiles store the role as free text (older rows hold spellings such as
``"Admin"`` or ``"Super Admin"``). Every comparison goes through
:func:`normalize_role` so the rest of the code only sees :class:`Role`.
"""

from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def is_admin(self) -> bool:
        return self in (Role.ADMIN, Role.SUPER_ADMIN)


_ALIASES = {
    "user": Role.USER,
    "admin": Role.ADMIN,
    "administrator": Role.ADMIN,
    "superadmin": Role.SUPER_ADMIN,
}


def normalize_role(value: str | Role | None) -> Role:
    """Map a stored role string to a :class:`Role`.

    Matching ignores case, spaces, hyphens and underscores. Unknown values
    fall back to :attr:`Role.USER`.
    """
    if isinstance(value, Role):
        return value
    if not value:
        return Role.USER
    key = "".join(ch for ch in str(value).lower() if ch not in " -_")
    return _ALIASES.get(key, Role.USER)
