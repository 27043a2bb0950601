# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Compute paths relative to root."""

from os import getenv
from os.path import abspath, join


def get_root_env(env="CHGPASSWD_ROOT"):
    """Return ``env`` if set, else "/"."""
    path = getenv(env)
    if path is None:
        return "/"
    elif len(path) == 0:
        return "/"
    else:
        return path


def get_path(*path_elements, root=None):
    """Return an absolute path based on `root` or `CHGPASSWD_ROOT`.

    Use this to compute paths like ``/etc/group`` so that an alternative
    root, an image being provisioned for example, can be updated instead of
    the running system.

    * If ``CHGPASSWD_ROOT`` is set to ``/srv/image``, then
      ``get_path('/etc/group')`` will return ``/srv/image/etc/group``.

    * If neither `root` nor ``CHGPASSWD_ROOT`` is given, you just get (a
      normalised version of) the location you passed in.

    Avoid calling this at import time; the environment may change before the
    path is needed.
    """
    # Strip off a leading slash from the given path, if any. If it were left
    # in, it would override preceding path elements and the root would be
    # ignored later on. The dot is there to make the call work even with zero
    # path elements.
    path = join(".", *path_elements).lstrip("/")
    if root is None or len(root) == 0:
        root = get_root_env()
    return abspath(join(root, path))


def get_group_path(root=None):
    return get_path("/etc/group", root=root)


def get_gshadow_path(root=None):
    return get_path("/etc/gshadow", root=root)


def get_login_defs_path(root=None):
    return get_path("/etc/login.defs", root=root)
