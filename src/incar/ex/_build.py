# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Incremental compilation of source files and update of a static archive with their object files.
This is an implementation detail - do not import it unless you know what you are doing."""

__all__ = ['Layout', 'RunSummary', 'Build']

import os
import dataclasses
from typing import FrozenSet, List, Optional, Set, Tuple

from .. import ut
from .. import di
from .. import cf
from . import _error
from . import _cache
from . import _toolrun


DEFAULT_CACHE_FILE_NAME = '.last_sizes.txt'
DEFAULT_SOURCE_SUFFIX = '.cpp'
DEFAULT_OBJECT_SUFFIX = '.o'

# name of the entry-point source file, which is not part of the archive
DEFAULT_EXCLUDED_SOURCE_NAMES = frozenset(['main.cpp'])


@dataclasses.dataclass(frozen=True)
class Layout:
    source_directory: str
    include_directory: str
    output_directory: str
    archive_name: str
    cache_file: str = DEFAULT_CACHE_FILE_NAME
    source_suffix: str = DEFAULT_SOURCE_SUFFIX
    object_suffix: str = DEFAULT_OBJECT_SUFFIX
    excluded_source_names: FrozenSet[str] = DEFAULT_EXCLUDED_SOURCE_NAMES
    prune_archive: bool = False

    def __post_init__(self):
        for name in ('source_directory', 'include_directory', 'output_directory', 'archive_name', 'cache_file'):
            value = getattr(self, name)
            if isinstance(value, os.PathLike):
                value = os.fspath(value)
                object.__setattr__(self, name, value)
            if not isinstance(value, str):
                raise TypeError(f"{name!r} must be a str or path-like object")
            if not value:
                raise ValueError(f"{name!r} must not be empty")

        for name in ('source_suffix', 'object_suffix'):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{name!r} must be a str")
            if os.path.splitext('x' + value) != ('x', value):
                raise ValueError(f"not a file name suffix: {value!r}")
        if self.source_suffix == self.object_suffix:
            raise ValueError("'source_suffix' and 'object_suffix' must be different")

        if os.path.basename(self.archive_name) != self.archive_name or self.archive_name in (os.curdir, os.pardir):
            raise ValueError(f"'archive_name' must be a file name without a directory part: {self.archive_name!r}")
        if os.path.splitext(self.archive_name)[1] == self.object_suffix:
            raise ValueError(f"'archive_name' must not end with {self.object_suffix!r}: {self.archive_name!r}")

        object.__setattr__(self, 'excluded_source_names', frozenset(self.excluded_source_names))
        object.__setattr__(self, 'prune_archive', bool(self.prune_archive))

    @property
    def archive_file(self) -> str:
        return os.path.join(self.output_directory, self.archive_name)

    def object_name_for(self, source_file: str) -> str:
        stem, _ = os.path.splitext(os.path.basename(source_file))
        return stem + self.object_suffix

    def object_file_for(self, source_file: str) -> str:
        return os.path.join(self.output_directory, self.object_name_for(source_file))


@dataclasses.dataclass(frozen=True)
class RunSummary:
    compiled: Tuple[str, ...] = ()  # paths of compiled source files
    skipped: Tuple[str, ...] = ()  # paths of source files considered up to date
    archived: Tuple[str, ...] = ()  # paths of object files inserted into the archive (and removed)
    removed_members: Tuple[str, ...] = ()  # names of members removed from the archive
    archive_created: bool = False

    @property
    def is_archive_updated(self) -> bool:
        return bool(self.archived or self.removed_members or self.archive_created)


def get_compile_reason(last_record: Optional[_cache.CompilationRecord], source_size: int,
                       is_object_available: bool) -> Optional[str]:
    # Return None if a source file with size *source_size* does not need to be compiled
    # and a short line describing the reason otherwise.
    #
    # Equality of size is used as an approximation of unchanged content.

    if last_record is None:
        return 'no record of last successful run'
    if last_record.source_size != source_size:
        return 'size has changed'
    if not is_object_available:
        return 'object file does not exist'


def get_archive_reason(last_record: Optional[_cache.CompilationRecord], record: _cache.CompilationRecord,
                       is_compiled: bool) -> Optional[str]:
    # Return None if the object file of a source file with the current *record* does not need to be
    # inserted into the archive and a short line describing the reason otherwise.

    if is_compiled:
        return 'was compiled'
    if last_record is None:
        return 'no record of last successful run'
    if last_record.object_mtime_ns != record.object_mtime_ns:
        return 'mtime has changed'


class Build:
    """
    Compile all changed source files in ``layout.source_directory`` with *compiler* and insert all new or
    changed object files into the static archive ``layout.archive_file`` with *archiver*.

    The state after each successful run is remembered in the record file ``layout.cache_file``.
    A failing helper aborts the run before the record file is written; all remaining work is done by
    the next run.
    """

    def __init__(self, layout: Layout, *, compiler: _toolrun.Compiler, archiver: _toolrun.Archiver):
        if not isinstance(layout, Layout):
            raise TypeError("'layout' must be a Layout")
        if not isinstance(compiler, _toolrun.Compiler):
            raise TypeError("'compiler' must be a Compiler")
        if not isinstance(archiver, _toolrun.Archiver):
            raise TypeError("'archiver' must be an Archiver")
        self._layout = layout
        self._compiler = compiler
        self._archiver = archiver

    @property
    def layout(self) -> Layout:
        return self._layout

    def list_source_files(self) -> List[str]:
        # Return the paths of all source files to be compiled, ordered by name.
        layout = self._layout
        with os.scandir(layout.source_directory) as it:
            names = [
                e.name for e in it
                if e.is_file() and os.path.splitext(e.name)[1] == layout.source_suffix and
                e.name not in layout.excluded_source_names
            ]
        return [os.path.join(layout.source_directory, n) for n in sorted(names)]

    def list_object_files(self) -> List[str]:
        # Return the paths of all object files in the output directory, ordered by name.
        layout = self._layout
        with os.scandir(layout.output_directory) as it:
            names = [e.name for e in it if e.is_file() and os.path.splitext(e.name)[1] == layout.object_suffix]
        return [os.path.join(layout.output_directory, n) for n in sorted(names)]

    def run(self) -> RunSummary:
        layout = self._layout

        last_cache = _cache.RecordCache.load(layout.cache_file)
        os.makedirs(layout.output_directory, exist_ok=True)

        new_cache, compiled, skipped = self._compile(last_cache)
        archived, removed_members, archive_created = self._update_archive(last_cache, new_cache, set(compiled))

        new_cache.save(layout.cache_file)

        return RunSummary(compiled=tuple(compiled), skipped=tuple(skipped), archived=tuple(archived),
                          removed_members=tuple(removed_members), archive_created=archive_created)

    def _compile(self, last_cache: _cache.RecordCache) -> Tuple[_cache.RecordCache, List[str], List[str]]:
        layout = self._layout
        is_archive_present = os.path.isfile(layout.archive_file)

        new_cache = _cache.RecordCache()
        compiled = []
        skipped = []

        for source_file in self.list_source_files():
            name = os.path.basename(source_file)
            object_file = layout.object_file_for(source_file)
            source_size = os.stat(source_file).st_size
            last_record = last_cache.get(source_file)

            try:
                object_mtime_ns = os.stat(object_file).st_mtime_ns
            except FileNotFoundError:
                object_mtime_ns = None

            # an object file removed after its insertion into the archive is still available as a member
            is_object_available = object_mtime_ns is not None or is_archive_present
            reason = get_compile_reason(last_record, source_size, is_object_available)

            if reason is None:
                if object_mtime_ns is None:
                    object_mtime_ns = last_record.object_mtime_ns
                new_cache[source_file] = _cache.CompilationRecord(source_size=source_size,
                                                                  object_mtime_ns=object_mtime_ns)
                di.inform(f'{name!r} is up to date', level=cf.level.compilation_skipped)
                skipped.append(source_file)
                continue

            with di.Cluster(f'compile {name!r}', level=cf.level.compilation, is_progress=True):
                di.inform(f'reason: {reason}', level=cf.level.necessity_check)
                self._execute_compiler(source_file, object_file)
                try:
                    object_mtime_ns = os.stat(object_file).st_mtime_ns
                except FileNotFoundError:
                    raise _error.CompilationError(f'compilation of {name!r} did not produce {object_file!r}') \
                        from None

            new_cache[source_file] = _cache.CompilationRecord(source_size=source_size,
                                                              object_mtime_ns=object_mtime_ns)
            compiled.append(source_file)

        if not compiled:
            di.inform('no changes detected, skipping compilation', level=cf.level.run_summary)

        return new_cache, compiled, skipped

    def _execute_compiler(self, source_file: str, object_file: str):
        name = os.path.basename(source_file)
        try:
            self._compiler.compile(source_file, object_file, self._layout.include_directory)
        except _error.HelperExecutionError as e:
            if e.returncode is None:
                raise
            raise _error.CompilationError(f'compilation of {name!r} failed with exit code {e.returncode}') \
                from None

    def _execute_archiver(self, action, description: str, *args):
        try:
            action(self._layout.archive_file, *args)
        except _error.HelperExecutionError as e:
            if e.returncode is None:
                raise
            raise _error.ArchivingError(f'{description} failed with exit code {e.returncode}') from None

    def _update_archive(self, last_cache: _cache.RecordCache, new_cache: _cache.RecordCache,
                        compiled: Set[str]) -> Tuple[List[str], List[str], bool]:
        layout = self._layout
        archive_name = layout.archive_name
        archive_file = layout.archive_file
        did_archive_exist = os.path.isfile(archive_file)

        source_file_by_object_name = {layout.object_name_for(p): p for p, _ in new_cache.items()}
        archived = []

        for object_file in self.list_object_files():
            name = os.path.basename(object_file)
            source_file = source_file_by_object_name.get(name)
            if source_file is None:
                continue  # not produced from a source file of this run

            reason = get_archive_reason(last_cache.get(source_file), new_cache[source_file],
                                        source_file in compiled)
            if reason is None:
                continue

            with di.Cluster(f'add {name!r} to {archive_name!r}', level=cf.level.archiving, is_progress=True):
                di.inform(f'reason: {reason}', level=cf.level.necessity_check)
                self._execute_archiver(self._archiver.insert, f'adding {name!r} to {archive_name!r}', [object_file])
                os.remove(object_file)
            archived.append(object_file)

        if not os.path.isfile(archive_file):
            object_files = self.list_object_files()
            with di.Cluster(f'create static library {archive_name!r}', level=cf.level.archiving, is_progress=True):
                di.inform(f'add {len(object_files)} object file(s)', level=cf.level.necessity_check)
                self._execute_archiver(self._archiver.insert, f'creation of {archive_name!r}', object_files)
                for p in object_files:
                    os.remove(p)
            archived.extend(object_files)

        removed_members = []
        if layout.prune_archive and did_archive_exist:
            removed_members = self._prune_archive(last_cache, new_cache)

        archive_created = not did_archive_exist
        if archive_created:
            di.inform(f'static library {archive_name!r} created', level=cf.level.run_summary)
        elif archived or removed_members:
            di.inform(f'static library {archive_name!r} updated', level=cf.level.run_summary)
        else:
            di.inform(f'static library {archive_name!r} is up to date', level=cf.level.run_summary)

        return archived, removed_members, archive_created

    def _prune_archive(self, last_cache: _cache.RecordCache, new_cache: _cache.RecordCache) -> List[str]:
        # Remove the members of source files that were present in the last successful run but are missing now.
        layout = self._layout
        archive_name = layout.archive_name

        present_names = {layout.object_name_for(p) for p, _ in new_cache.items()}
        member_names = sorted(set(
            layout.object_name_for(p) for p, _ in last_cache.items()
            if p not in new_cache and layout.object_name_for(p) not in present_names))
        if not member_names:
            return []

        member_list_str = ', '.join(repr(n) for n in member_names)
        with di.Cluster(f'remove {len(member_names)} member(s) from {archive_name!r}',
                        level=cf.level.archiving, is_progress=True):
            di.inform(f'members: {member_list_str}', level=cf.level.necessity_check)
            self._execute_archiver(self._archiver.remove, f'removal of members from {archive_name!r}', member_names)
        return member_names


ut.set_module_name_to_parent_by_name(vars(), __all__)
