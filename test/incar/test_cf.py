# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

import testenv  # also sets up module search paths
import incar.cf
import incar.di
import inspect
import unittest


class ImportTest(unittest.TestCase):

    def test_contains_only_declared_modules(self):
        modules = [n for n in dir(incar.cf) if inspect.ismodule(getattr(incar.cf, n))]
        self.assertEqual(['level'], modules)

    def test_level_contains_no_module(self):
        modules = [n for n in dir(incar.cf.level) if inspect.ismodule(getattr(incar.cf.level, n))]
        self.assertEqual([], modules)


class LevelTest(unittest.TestCase):

    def test_all_are_valid_levels(self):
        names = [n for n in dir(incar.cf.level) if not n.startswith('_')]
        self.assertIn('compilation', names)
        for n in names:
            level = getattr(incar.cf.level, n)
            self.assertIsInstance(level, int, n)
            self.assertGreater(level, 0, n)

    def test_problems_are_not_suppressed_by_default(self):
        self.assertGreaterEqual(incar.cf.level.cache_problem, incar.di.WARNING)
        self.assertLess(incar.cf.level.helper_execution, incar.di.INFO)
