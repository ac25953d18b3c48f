# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Version of incar.
This is an implementation detail - do not import it unless you know what you are doing."""

__version__ = '0.3.0'

version_info = (0, 3, 0)
