# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Configuration parameters."""

from . import level

# Default value for output files of helpers (compiler, archiver), that is used when *None* is given.
# False means: Output is suppressed by default.
# True means: Output file is inherited from the Python process by default.
execute_helper_inherits_files_by_default: bool = True
