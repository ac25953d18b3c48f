# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Log levels for incar.di by category."""

from .. import di

cache_loading: int = di.DEBUG + 3
cache_problem: int = di.WARNING

necessity_check: int = di.DEBUG + 3
compilation: int = di.INFO
compilation_skipped: int = di.INFO

archiving: int = di.INFO

helper_execution: int = di.DEBUG + 7

run_summary: int = di.INFO

del di
