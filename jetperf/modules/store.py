"""
HDF5 output helpers
"""

from __future__ import annotations

import h5py

from .exceptions import DuplicateGroupError


def create_group(parent: h5py.Group, name: str) -> h5py.Group:
    """
    Create child group `name` under `parent`

    Raises:
        DuplicateGroupError: If `parent` already has a child called `name`
    """
    if name in parent:
        raise DuplicateGroupError(name, parent.name)
    return parent.create_group(name)
