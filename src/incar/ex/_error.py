# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Exception classes for incar.ex.
This is an implementation detail - do not import it unless you know what you are doing."""

__all__ = [
    'BuildError',
    'HelperExecutionError',
    'CompilationError',
    'ArchivingError',
    'CacheError'
]

from typing import Optional
from .. import ut


class BuildError(Exception):
    pass


class HelperExecutionError(BuildError):
    def __init__(self, *args, returncode: Optional[int] = None):
        super().__init__(*args)
        self.returncode = returncode


class CompilationError(BuildError):
    pass


class ArchivingError(BuildError):
    pass


class CacheError(BuildError):
    pass


ut.set_module_name_to_parent_by_name(vars(), __all__)
