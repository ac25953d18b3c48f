# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

import testenv  # also sets up module search paths
import incar.di
import logging
import io
import unittest


class LoggingCompatibilityTest(unittest.TestCase):

    def test_levels_are_equals(self):
        for level_name in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            self.assertEqual(getattr(logging, level_name), getattr(incar.di, level_name))


class GetLevelIndicatorTest(unittest.TestCase):

    def test_exact_levels_are_correct(self):
        self.assertEqual('D', incar.di.get_level_indicator(incar.di.DEBUG))
        self.assertEqual('I', incar.di.get_level_indicator(incar.di.INFO))
        self.assertEqual('W', incar.di.get_level_indicator(incar.di.WARNING))
        self.assertEqual('E', incar.di.get_level_indicator(incar.di.ERROR))
        self.assertEqual('C', incar.di.get_level_indicator(incar.di.CRITICAL))

    def test_between_is_next_smaller(self):
        self.assertEqual('D', incar.di.get_level_indicator(1))
        self.assertEqual('I', incar.di.get_level_indicator(incar.di.INFO + 1))
        self.assertEqual('I', incar.di.get_level_indicator(incar.di.WARNING - 1))
        self.assertEqual('C', incar.di.get_level_indicator(incar.di.CRITICAL + 123))

    def test_fails_for_nonpositive(self):
        with self.assertRaises(ValueError) as cm:
            incar.di.get_level_indicator(logging.NOTSET)
        self.assertEqual("'level' must be positive", str(cm.exception))

    def test_fails_for_none(self):
        with self.assertRaises(TypeError) as cm:
            # noinspection PyTypeChecker
            incar.di.get_level_indicator(None)
        self.assertEqual("'level' must be something convertible to an int", str(cm.exception))


class FormatMessageTest(unittest.TestCase):

    def format_info_message(self, message):
        return incar.di.format_message(message, incar.di.INFO)

    def test_single_line_returns_stripped(self):
        self.assertEqual('I äüä schoo\U0001f609', self.format_info_message(' äüä schoo\U0001f609   '))

    def test_fails_for_empty(self):
        with self.assertRaises(ValueError) as cm:
            self.format_info_message(' \n\n ')
        self.assertEqual("'message' must contain at least one non-empty line", str(cm.exception))

    def test_fails_for_bytes(self):
        with self.assertRaises(TypeError) as cm:
            # noinspection PyTypeChecker
            self.format_info_message(b'abc')
        self.assertEqual("'message' must be a str", str(cm.exception))

    def test_fails_for_control_character(self):
        with self.assertRaises(ValueError) as cm:
            self.format_info_message('abc\n    a\0')
        msg = "'message' must not contain ASCII control characters except '\\t', unlike line 2"
        self.assertEqual(msg, str(cm.exception))

    def test_continuation_lines_are_unindented(self):
        m = self.format_info_message(
            """
            compile 'a.cpp'
                reason: size has changed
                  detail
            """)
        self.assertEqual("I compile 'a.cpp' \n  | reason: size has changed \n  | detail", m)

    def test_fails_for_underindented(self):
        with self.assertRaises(ValueError) as cm:
            self.format_info_message('title\n x')
        msg = (
            "each continuation line in 'message' must be indented at least 2 spaces more than "
            "the first non-empty line, unlike line 2"
        )
        self.assertEqual(msg, str(cm.exception))

    def test_fails_for_reserved_end(self):
        for c in '.]':
            with self.assertRaises(ValueError):
                self.format_info_message('title' + c + '\n  x')

        with self.assertRaises(ValueError) as cm:
            self.format_info_message('done.')
        self.assertEqual("first non-empty line in 'message' must not end with '.'", str(cm.exception))

    def test_fields_are_aligned(self):
        m = self.format_info_message('title\n  a:\t1\n  bcd:\t2')
        self.assertEqual("I title \n  | a:  1 \n  | bcd:2", m)

    def test_tab_in_single_line_is_removed(self):
        self.assertEqual('I a:1', self.format_info_message('a:\t1'))


class OutputTestCase(unittest.TestCase):

    def setUp(self):
        super().setUp()
        self.output = io.StringIO()
        self._original_output_file = incar.di.set_output_file(self.output)
        incar.di.set_threshold_level(incar.di.INFO)

    def tearDown(self):
        incar.di.set_output_file(self._original_output_file)
        incar.di.set_threshold_level(incar.di.INFO)
        super().tearDown()


class SetOutputFileTest(OutputTestCase):

    def test_returns_previous(self):
        f = io.StringIO()
        self.assertIs(self.output, incar.di.set_output_file(f))
        self.assertIs(f, incar.di.set_output_file(self.output))

    def test_fails_without_write(self):
        with self.assertRaises(TypeError) as cm:
            incar.di.set_output_file(None)
        self.assertEqual("'file' does not have a 'write' method: None", str(cm.exception))


class InformTest(OutputTestCase):

    def test_unsuppressed_is_written(self):
        self.assertTrue(incar.di.inform('hello\n  world', level=incar.di.WARNING))
        self.assertEqual('W hello \n  | world\n', self.output.getvalue())

    def test_suppressed_is_not_written(self):
        self.assertFalse(incar.di.inform('hello', level=incar.di.DEBUG))
        self.assertEqual('', self.output.getvalue())

        incar.di.set_threshold_level(incar.di.DEBUG)
        self.assertTrue(incar.di.is_unsuppressed_level(incar.di.DEBUG))
        self.assertTrue(incar.di.inform('hello', level=incar.di.DEBUG))
        self.assertEqual('D hello\n', self.output.getvalue())

    def test_suppressed_message_is_checked(self):
        with self.assertRaises(ValueError):
            incar.di.inform('', level=incar.di.DEBUG)


class ClusterTest(OutputTestCase):

    def test_messages_are_indented(self):
        with incar.di.Cluster('A'):
            incar.di.inform('a')
            with incar.di.Cluster('B'):
                incar.di.inform('b\n  c')
        incar.di.inform('d')
        self.assertEqual('I A\n  I a\n  I B\n    I b \n      | c\nI d\n', self.output.getvalue())

    def test_progress_is_done(self):
        with incar.di.Cluster("compile 'a.cpp'", is_progress=True):
            pass
        self.assertEqual("I compile 'a.cpp'...\n  I done.\n", self.output.getvalue())

    def test_progress_of_multiline_title_is_appended_to_first_line(self):
        with incar.di.Cluster("compile 'a.cpp'\n  reason: new", is_progress=True):
            pass
        self.assertEqual("I compile 'a.cpp'... \n  | reason: new\n  I done.\n", self.output.getvalue())

    def test_progress_failed_names_exception(self):
        with self.assertRaises(ValueError):
            with incar.di.Cluster("compile 'a.cpp'", is_progress=True):
                raise ValueError
        self.assertEqual("I compile 'a.cpp'...\n  E failed with ValueError.\n", self.output.getvalue())

    def test_suppressed_title_is_written_with_first_unsuppressed_message(self):
        with incar.di.Cluster('A', level=incar.di.DEBUG, is_progress=True):
            incar.di.inform('b', level=incar.di.DEBUG)
        self.assertEqual('', self.output.getvalue())

        with incar.di.Cluster('A', level=incar.di.DEBUG, is_progress=True):
            incar.di.inform('b')
        self.assertEqual('D A...\n  I b\n  D done.\n', self.output.getvalue())
