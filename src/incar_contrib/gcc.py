# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Compile C++ source files with the GNU Compiler Collection."""

# GCC: <https://gcc.gnu.org/>
# Tested with: gcc 8.3.0
# Executable: 'g++'
#
# Usage example:
#
#   import incar_contrib.gcc
#
#   incar_contrib.gcc.CplusplusCompilerGcc().compile('src/a.cpp', 'build/out/a.o', 'include/')

__all__ = ['CplusplusCompilerGcc']

import sys
from typing import Any, List

import incar.ex

assert sys.version_info >= (3, 7)


class CplusplusCompilerGcc(incar.ex.Compiler):
    # Dynamic helper, looked-up in $PATH.
    EXECUTABLE = 'g++'

    # Command line parameters for *EXECUTABLE* before all others, e.g. ('-O2', '-g').
    EXTRA_ARGUMENTS = ()

    def get_compile_arguments(self, source_file: str, object_file: str, include_directory: str) -> List[Any]:
        # https://gcc.gnu.org/onlinedocs/gcc/Overall-Options.html
        # https://gcc.gnu.org/onlinedocs/gcc/Directory-Options.html
        compile_arguments = [str(a) for a in self.EXTRA_ARGUMENTS]
        compile_arguments += ['-c', source_file, '-o', object_file]
        compile_arguments += ['-I', include_directory]  # looked up for #include <p> and #include "p"
        return compile_arguments
