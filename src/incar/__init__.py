# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""incar - compile changed source files and keep a static archive of their object files up to date."""

import sys
from .version import __version__, version_info
del version

assert sys.version_info >= (3, 7)
del sys

# inter-dependencies of modules of this package
# (later line may depend on earlier lines):
#
#                 depends on
#
#     ut             ->
#     di             ->   ut
#     cf             ->       di
#     ex             ->   ut  di  cf
#     launcher       ->   ut  di  cf  ex
