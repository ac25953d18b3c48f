# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Write indented diagnostic messages of a build run to a file.
This module uses levels compatible with the ones of the 'logging' module."""

__all__ = [
    'DEBUG',
    'INFO',
    'WARNING',
    'ERROR',
    'CRITICAL',
    'set_threshold_level',
    'is_unsuppressed_level',
    'get_level_indicator',
    'set_output_file',
    'format_message',
    'Cluster',
    'inform'
]

import sys
from typing import List, Optional


# these correspond to logging.* but are fixed (see https://docs.python.org/3/library/logging.html#logging-levels)
DEBUG = 10
INFO = 20
WARNING = 30
ERROR = 40
CRITICAL = 50

_RESERVED_TITLEEND_CHARACTERS = " .]"

_CONTINUATION_LINE_PREFIX = '  | '

_output_file = sys.stderr

_clusters = []

_lowest_unsuppressed_level: int = 1 if sys.flags.verbose else INFO

# these correspond to the first characters of the standard logging.getLevelName[...]
_level_indicator_by_level = {
    DEBUG: 'D',
    INFO: 'I',
    WARNING: 'W',
    ERROR: 'E',
    CRITICAL: 'C'
}


def _normalize_message_lines(message: str) -> List[str]:
    # Return the non-empty lines of *message* without trailing white-space.
    # Continuation lines are unindented relative to the first line and must be indented by at least 2 spaces.

    lines = []
    first_indentation = None

    for lineno0, line in enumerate(message.splitlines()):
        line = line.rstrip()
        if any(c < ' ' and c != '\t' for c in line):
            raise ValueError(f"'message' must not contain ASCII control characters except '\\t', "
                             f"unlike line {lineno0 + 1}")
        if not line:
            continue

        if first_indentation is None:
            stripped_line = line.lstrip()
            first_indentation = line[:len(line) - len(stripped_line)]
            if stripped_line[-1] in _RESERVED_TITLEEND_CHARACTERS:
                raise ValueError(f"first non-empty line in 'message' must not end with {stripped_line[-1]!r}")
            lines.append(stripped_line)
        else:
            if not line.startswith(first_indentation + '  '):
                msg = (
                    f"each continuation line in 'message' must be indented at least 2 spaces more than "
                    f"the first non-empty line, unlike line {lineno0 + 1}"
                )
                raise ValueError(msg)
            lines.append(line[len(first_indentation):].strip())

    if not lines:
        raise ValueError("'message' must contain at least one non-empty line")

    return lines


def _align_fields(lines: List[str]) -> List[str]:
    # '\t' ends a field that is left-aligned over all lines
    fields_per_line = [line.split('\t') for line in lines]
    width_by_index = {}
    for fields in fields_per_line:
        for i, field in enumerate(fields[:-1]):
            width_by_index[i] = max(len(field), width_by_index.get(i, 0))
    return [
        ''.join([f.ljust(width_by_index[i]) for i, f in enumerate(fields[:-1])] + fields[-1:])
        for fields in fields_per_line
    ]


def _checked_level(level):
    try:
        level = int(level)
    except (TypeError, ValueError):
        raise TypeError("'level' must be something convertible to an int")

    if not level > 0:
        raise ValueError("'level' must be positive")

    return level


def set_threshold_level(level):
    global _lowest_unsuppressed_level
    _lowest_unsuppressed_level = _checked_level(level)


def is_unsuppressed_level(level):
    return _checked_level(level) >= _lowest_unsuppressed_level


def get_level_indicator(level: int) -> str:
    level = _checked_level(level)
    standard_level = max([DEBUG] + [s for s in _level_indicator_by_level if s <= level])
    return _level_indicator_by_level[standard_level]


def set_output_file(file):
    if not hasattr(file, 'write'):
        raise TypeError(f"'file' does not have a 'write' method: {file!r}")

    global _output_file
    _output_file, f = file, _output_file
    return f


def format_message(message: str, level: int) -> str:
    """
    Return the lines of *message* prefixed by the level indicator of *level*.

    Each line except the last one ends with a space character; each continuation line starts with ``'  | '``.
    """
    if not isinstance(message, str):
        raise TypeError("'message' must be a str")

    lines = _normalize_message_lines(message)
    if len(lines) > 1:
        lines = _align_fields(lines)
        lines = lines[:1] + [_CONTINUATION_LINE_PREFIX + li for li in lines[1:]]
    elif '\t' in lines[0]:
        lines = [lines[0].replace('\t', '')]

    lines[0] = get_level_indicator(level) + ' ' + lines[0]
    return '\n'.join([li + ' ' for li in lines[:-1]] + lines[-1:])


def _indent_message(message: str, nesting: int):
    indentation = '  ' * max(nesting, 0)
    return '\n'.join(indentation + line for line in message.splitlines())


def _append_to_title(formatted_message: str, suffix: str) -> str:
    initial_line, lf, rest = formatted_message.partition('\n')
    if not lf:
        return initial_line + suffix  # single line
    return initial_line[:-1] + suffix + ' ' + lf + rest


class Cluster:
    # Context manager for a group of messages. The title is output when the cluster is entered and its level
    # is not suppressed, or when a message is output inside the cluster.
    # With *is_progress*, 'done.' or 'failed with ...' is output on exit.

    def __init__(self, message: str, *, level: int = INFO, is_progress: bool = False):
        self._level: int = _checked_level(level)
        self._formatted_title = format_message(message, self._level)
        self._is_progress = bool(is_progress)
        self._did_inform: bool = False
        self._nesting_level: Optional[int] = None  # set in __enter__()

    def inform_title(self):
        if self._did_inform:
            return

        for c in _clusters:
            if c is self:
                break
            c.inform_title()  # is parent of self

        title = self._formatted_title
        if self._is_progress:
            title = _append_to_title(title, '...')

        _output_file.write(_indent_message(title, self._nesting_level) + '\n')
        self._did_inform = True

    def __enter__(self):
        self._nesting_level = len(_clusters)
        if is_unsuppressed_level(self._level):
            self.inform_title()
        _clusters.append(self)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        nesting = self._nesting_level

        self._nesting_level = None
        if _clusters and _clusters[-1] is self:
            del _clusters[-1]

        if self._did_inform and self._is_progress:
            if exc_val is None:
                result = f'{get_level_indicator(min(self._level, INFO))} done.'
            else:
                result = f'{get_level_indicator(max(self._level, ERROR))} failed with {exc_val.__class__.__qualname__}.'
            _output_file.write(_indent_message(result, nesting + 1) + '\n')


def inform(message, *, level: int = INFO) -> bool:
    level = _checked_level(level)

    formatted_message = format_message(message, level)

    if not is_unsuppressed_level(level):
        return False

    if _clusters:
        _clusters[-1].inform_title()

    _output_file.write(_indent_message(formatted_message, len(_clusters)) + '\n')
    return True
