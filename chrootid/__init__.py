"""Library entry point.

Resolve users and groups against the ``/etc/passwd`` and ``/etc/group``
files of a root filesystem tree (an extracted image, a chroot), instead of
the host databases.

The module level functions create a fresh resolver for the host platform
on every call::

    >>> import chrootid
    >>> user = chrootid.resolve_user("/tmp/rootfs", "1000:staff")
    >>> chrootid.resolve_supplementary_groups("/tmp/rootfs", user)
    [27, 100]

Pass a custom reader or settings to :py:func:`chrootid.resolver.resolver`
to change how files are read or how malformed lines are handled.
"""
from __future__ import annotations

import chrootid.utils


def initlib(verbosity_level: int = chrootid.utils.ui.WARNING) -> None:
    """Initialize the library.

    Can be called again to re-initialize in another point; for instance
    when running tests.
    """
    chrootid.utils.init_ui(verbosity_level)


initlib()

from chrootid.errors import (
    IdentityError,
    MalformedDatabase,
    ResolveTimeout,
    UnknownGroup,
    UnknownUser,
    UnsupportedPlatform,
)
from chrootid.resolver import (
    IdentityResolver,
    PosixResolver,
    ResolvedGroup,
    ResolvedUser,
    Root,
    Specifier,
    UnsupportedResolver,
    UserLike,
    parse_specifier,
    resolver,
)
from chrootid.utils.config import Settings, load_config


def resolve_user(root: Root, spec: str) -> ResolvedUser:
    """Resolve *spec* (``user[:group]``) inside *root*.

    See :py:meth:`chrootid.resolver.IdentityResolver.resolve_user`.
    """
    return resolver().resolve_user(root, spec)


def resolve_group(root: Root, group_spec: str) -> ResolvedGroup:
    """Resolve the group called *group_spec* inside *root*"""
    return resolver().resolve_group(root, group_spec)


def resolve_supplementary_groups(root: Root, user: UserLike) -> list[int]:
    """Return the gids of the groups listing *user* as a member"""
    return resolver().resolve_supplementary_groups(root, user)


def lookup_home(root: Root, uid: int) -> str:
    """Return the home directory of *uid* inside *root*"""
    return resolver().lookup_home(root, uid)
