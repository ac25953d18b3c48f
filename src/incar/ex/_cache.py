# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Abstraction of the record file that remembers the state of each source file after the last successful run.
This is an implementation detail - do not import it unless you know what you are doing."""

__all__ = ['CompilationRecord', 'RecordCache']

import os
import re
import tempfile
import dataclasses
from typing import Dict, Iterator, Optional, Tuple

from .. import ut
from .. import di
from .. import cf
from . import _error


# Each line is '<source-path> <source-size> <object-mtime-ns>'. The two numbers are split off from the right,
# so a source path may contain ' ' but not a line separator.

_ENCODING = 'utf-8'
_ERRORS = 'surrogateescape'  # round-trip loss-less for every path on POSIX

_SIZE_REGEX = re.compile(r'0|[1-9][0-9]*')
_MTIME_REGEX = re.compile(r'0|-?[1-9][0-9]*')


@dataclasses.dataclass(frozen=True)
class CompilationRecord:
    source_size: int
    object_mtime_ns: int = 0  # 0 if unknown


def encode_record(source_path: str, record: CompilationRecord) -> str:
    if not isinstance(source_path, str) or not isinstance(record, CompilationRecord):
        raise TypeError
    if not source_path or any(c in source_path for c in '\r\n'):
        raise ValueError(f'not representable in record file: {source_path!r}')
    if not (isinstance(record.source_size, int) and isinstance(record.object_mtime_ns, int)):
        raise TypeError
    if record.source_size < 0:
        raise ValueError
    return f'{source_path} {record.source_size} {record.object_mtime_ns}'


def decode_record(line: str) -> Tuple[str, CompilationRecord]:
    parts = line.rsplit(' ', 2)
    if len(parts) != 3 or not parts[0]:
        raise ValueError('not 3 fields')
    source_path, size, mtime_ns = parts
    if not _SIZE_REGEX.fullmatch(size):
        raise ValueError(f'invalid source size: {size!r}')
    if not _MTIME_REGEX.fullmatch(mtime_ns):
        raise ValueError(f'invalid object mtime: {mtime_ns!r}')
    return source_path, CompilationRecord(source_size=int(size), object_mtime_ns=int(mtime_ns))


class RecordCache:
    # Mapping from the path of a source file to its CompilationRecord.
    # A RecordCache is never patched on disk: it is loaded once and replaced by a new one as a whole.

    def __init__(self, record_by_path: Optional[Dict[str, CompilationRecord]] = None):
        self._record_by_path: Dict[str, CompilationRecord] = {}
        if record_by_path:
            for p, r in record_by_path.items():
                self[p] = r

    def __len__(self) -> int:
        return len(self._record_by_path)

    def __contains__(self, source_path) -> bool:
        return source_path in self._record_by_path

    def __getitem__(self, source_path: str) -> CompilationRecord:
        return self._record_by_path[source_path]

    def __setitem__(self, source_path: str, record: CompilationRecord):
        if not isinstance(source_path, str):
            raise TypeError("'source_path' must be a str")
        if not isinstance(record, CompilationRecord):
            raise TypeError("'record' must be a CompilationRecord")
        self._record_by_path[source_path] = record

    def __eq__(self, other) -> bool:
        if not isinstance(other, RecordCache):
            return NotImplemented
        return self._record_by_path == other._record_by_path

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self._record_by_path!r})'

    def get(self, source_path: str) -> Optional[CompilationRecord]:
        return self._record_by_path.get(source_path)

    def items(self) -> Iterator[Tuple[str, CompilationRecord]]:
        return iter(sorted(self._record_by_path.items()))

    @classmethod
    def load(cls, file_path: str) -> 'RecordCache':
        # Return the content of the record file *file_path*.
        # A missing, unreadable or malformed record file means: no history. This never fails.

        try:
            with open(file_path, 'r', encoding=_ENCODING, errors=_ERRORS, newline='\n') as f:
                lines = f.read().split('\n')
        except FileNotFoundError:
            di.inform(f'no record file {file_path!r} - start without history', level=cf.level.cache_loading)
            return cls()
        except OSError as e:
            msg = (
                f'record file {file_path!r} is not readable - start without history\n'
                f'    reason: {ut.exception_to_line(e, True)}'
            )
            di.inform(msg, level=cf.level.cache_problem)
            return cls()

        if lines[-1:] == ['']:
            del lines[-1]

        cache = cls()
        for lineno0, line in enumerate(lines):
            try:
                source_path, record = decode_record(line)
            except ValueError as e:
                msg = (
                    f'record file {file_path!r} is malformed - start without history\n'
                    f'    line {lineno0 + 1}: {ut.exception_to_line(e)}'
                )
                di.inform(msg, level=cf.level.cache_problem)
                return cls()
            cache[source_path] = record

        di.inform(f'loaded {len(cache)} record(s) from {file_path!r}', level=cf.level.cache_loading)
        return cache

    def save(self, file_path: str):
        # Replace the record file *file_path* by one that contains exactly the records of this object.
        # The replacement is atomic if the filesystem supports it.

        try:
            content = ''.join(encode_record(p, r) + '\n' for p, r in self.items())
        except ValueError as e:
            raise _error.CacheError(f'cannot save records to {file_path!r}: {e}') from None

        directory = os.path.dirname(file_path) or os.curdir
        temporary_path = None
        try:
            fd, temporary_path = tempfile.mkstemp(prefix=os.path.basename(file_path) + '.', suffix='.tmp',
                                                  dir=directory)
            with open(fd, 'w', encoding=_ENCODING, errors=_ERRORS, newline='\n') as f:
                f.write(content)
            os.replace(temporary_path, file_path)
            temporary_path = None
        except OSError as e:
            msg = (
                f'cannot save records to {file_path!r}\n'
                f'  | {ut.exception_to_line(e, True)}'
            )
            raise _error.CacheError(msg) from None
        finally:
            if temporary_path is not None:
                try:
                    os.remove(temporary_path)
                except FileNotFoundError:
                    pass


ut.set_module_name_to_parent_by_name(vars(), __all__)
