# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Manipulate static libraries with GNU Binutils."""

# GNU Binutils: <https://www.gnu.org/software/binutils/>
# Tested with: GNU Binutils for Debian 2.31.1
# Executable: 'ar'
#
# Usage example:
#
#   import incar_contrib.gnubinutils
#
#   archiver = incar_contrib.gnubinutils.Archive()
#   archiver.insert('build/out/libexample.a', ['build/out/a.o', 'build/out/b.o'])
#   archiver.remove('build/out/libexample.a', ['b.o'])

__all__ = ['Archive']

import sys
from typing import Any, List

import incar.ex

assert sys.version_info >= (3, 7)


class Archive(incar.ex.Archiver):
    # Dynamic helper, looked-up in $PATH.
    EXECUTABLE = 'ar'

    # String of operation modifiers for operation 'r' (each modifier is a ASCII letter).
    # 'c' suppresses the message when the archive is created.
    OPERATION_MODIFIERS = 'c'

    def get_insert_arguments(self, archive_file: str, object_files: List[str]) -> List[Any]:
        # insert with replacement; members are identified by their file name
        return ['r' + self.OPERATION_MODIFIERS, archive_file] + list(object_files)

    def get_remove_arguments(self, archive_file: str, member_names: List[str]) -> List[Any]:
        return ['d', archive_file] + list(member_names)
