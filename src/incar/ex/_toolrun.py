# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Execution of helpers (external executables like a compiler) as subprocesses.
This is an implementation detail - do not import it unless you know what you are doing."""

__all__ = ['Tool', 'Compiler', 'Archiver']

import os
import shutil
import subprocess
from typing import Any, Collection, Iterable, List, Optional, Union

from .. import ut
from .. import di
from .. import cf
from . import _error


def find_helper(executable: str) -> str:
    # Return the absolute path of the helper *executable*.
    # An *executable* without a directory part is looked-up in $PATH.

    if not executable:
        raise ValueError("'executable' must not be empty")

    if os.path.dirname(executable):
        path = os.path.abspath(executable)
        if not os.path.isfile(path):
            raise _error.HelperExecutionError(f'helper not found: {executable!r}')
        return path

    path = shutil.which(executable)
    if path is None:
        raise _error.HelperExecutionError(f"helper not found in '$PATH': {executable!r}")
    return os.path.abspath(path)


def _open_potential_file(potential_file: Union[None, bool, str]):
    if potential_file is None:
        potential_file = cf.execute_helper_inherits_files_by_default

    if potential_file is True:
        return None  # inherit

    if not potential_file:
        return subprocess.DEVNULL

    return open(potential_file, 'wb')


def _close_potential_file(f):
    try:
        c = f.close
    except AttributeError:
        pass
    else:
        c()


def execute_helper(executable: str, arguments: Iterable[Any] = (), *,
                   expected_returncodes: Collection[int] = frozenset([0]),
                   stdout_output: Union[None, bool, str] = None,
                   stderr_output: Union[None, bool, str] = None) -> int:
    # Run the helper *executable* with *arguments* (no shell is involved) and wait for it to exit.
    # Return its exit status; raise HelperExecutionError if it is not in *expected_returncodes*.

    helper_path = find_helper(executable)
    commandline_tokens = [helper_path] + [str(a) for a in arguments]

    if di.is_unsuppressed_level(cf.level.helper_execution):
        argument_list_str = ', '.join([repr(t) for t in commandline_tokens[1:]])
        msg = (
            f'execute helper {executable!r}\n'
            f'    path: \t{helper_path!r}\n'
            f'    arguments: \t{argument_list_str}'
        )
        di.inform(msg, level=cf.level.helper_execution)

    stdout_file = _open_potential_file(stdout_output)
    stderr_file = _open_potential_file(stderr_output)
    try:
        completed = subprocess.run(commandline_tokens, stdin=None, stdout=stdout_file, stderr=stderr_file)
    except OSError as e:
        raise _error.HelperExecutionError(f'execution of {executable!r} failed: {e}') from None
    finally:
        _close_potential_file(stderr_file)
        _close_potential_file(stdout_file)

    returncode = completed.returncode
    if returncode not in expected_returncodes:
        msg = f'execution of {executable!r} returned unexpected exit code {returncode}'
        raise _error.HelperExecutionError(msg, returncode=returncode)

    return returncode


class Tool:
    # Base class of a helper-backed tool.
    # Configure by subclassing and overriding the class attributes.

    # Dynamic helper, looked-up in $PATH unless it contains a directory part.
    EXECUTABLE = ''

    # Output files for the helper's standard output and standard error (see execute_helper()).
    STDOUT_OUTPUT: Union[None, bool, str] = None
    STDERR_OUTPUT: Union[None, bool, str] = None

    def execute(self, arguments: List[Any], *,
                expected_returncodes: Optional[Collection[int]] = None) -> int:
        if not self.EXECUTABLE:
            raise NotImplementedError(f"{self.__class__.__qualname__} does not define 'EXECUTABLE'")
        if expected_returncodes is None:
            expected_returncodes = frozenset([0])
        return execute_helper(self.EXECUTABLE, arguments, expected_returncodes=expected_returncodes,
                              stdout_output=self.STDOUT_OUTPUT, stderr_output=self.STDERR_OUTPUT)

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}()'


class Compiler(Tool):
    # Compiles exactly one source file to exactly one object file.

    def get_compile_arguments(self, source_file: str, object_file: str, include_directory: str) -> List[Any]:
        raise NotImplementedError

    def compile(self, source_file: str, object_file: str, include_directory: str):
        self.execute(self.get_compile_arguments(source_file, object_file, include_directory))


class Archiver(Tool):
    # Inserts object files into (or removes members from) a static archive; creates the archive if necessary.

    def get_insert_arguments(self, archive_file: str, object_files: List[str]) -> List[Any]:
        raise NotImplementedError

    def get_remove_arguments(self, archive_file: str, member_names: List[str]) -> List[Any]:
        raise NotImplementedError

    def insert(self, archive_file: str, object_files: List[str]):
        self.execute(self.get_insert_arguments(archive_file, object_files))

    def remove(self, archive_file: str, member_names: List[str]):
        self.execute(self.get_remove_arguments(archive_file, member_names))


ut.set_module_name_to_parent_by_name(vars(), __all__)
