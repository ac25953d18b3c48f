# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

from ._error import *
from ._cache import *
from ._toolrun import *
from ._build import *

# inter-dependencies and import order of modules of this package
# (later line may depend on earlier lines, import in the following order):
#
#                 depends on
#
#     _error         ->
#     _cache         ->   _error
#     _toolrun       ->   _error
#     _build         ->   _error   _cache   _toolrun
