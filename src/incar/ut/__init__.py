# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""(Technical) utilities.
This is an implementation detail - do not import it unless you know what you are doing."""

__all__ = []

from typing import Any, Dict, Iterable


def set_module_name_to_parent_by_name(obj_by_name: Dict[str, Any], names: Iterable):
    # e.g. incar.ex._error.CompilationError -> incar.ex.CompilationError
    for name in names:
        obj = obj_by_name[name]
        obj.__module__ = '.'.join(obj.__module__.split('.')[:-1])


def exception_to_line(exc: BaseException, force_classname: bool = False):
    first_line = str(exc)
    if first_line:
        first_line = first_line.splitlines()[0].replace('\t', ' ').strip()  # only first line

    parts = []
    if force_classname or not first_line:
        cls = exc.__class__
        parts.append(f'{cls.__module__}.{cls.__qualname__}')
    if first_line:
        parts.append(first_line)

    return ': '.join(parts)
