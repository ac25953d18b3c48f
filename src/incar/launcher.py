# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""Command-line interface of incar.
This is an implementation detail - do not import it unless you know what you are doing."""

__all__ = ['main']

import sys
import os.path

# if set and not empty: path of the record file instead of the default
CACHE_FILE_ENVIRONMENT_VARIABLE = 'INCAR_CACHE_FILE'


def get_usage():
    executable_name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else 'incar'
    if not all(' ' < c < chr(0x7F) for c in executable_name):
        executable_name = repr(executable_name)
    return (
        f'usage: {executable_name} [ --help ] '
        f'<source-dir> <include-dir> <output-dir> <static-library-name>'
    )


def get_help():
    # 80 characters xxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx
    help_msg = \
        """
        Compile each changed '.cpp' file in <source-dir> except 'main.cpp' with 'g++'
        and insert the resulting object files into the static library
        <static-library-name> in <output-dir> with 'ar'.

        When called with '--help' as the first parameter, displays this help and exits.
        Otherwise, exactly four parameters are required; additional parameters are
        not ignored but rejected like missing ones.

        A source file is compiled if it was not compiled by the last successful run,
        if its size has changed since, or if its object file is neither in
        <output-dir> nor in the static library. <include-dir> is added to the include
        search path of 'g++'. Object files inserted into the static library are
        removed from <output-dir>.

        The state after each successful run is saved in the file '.last_sizes.txt' in
        the current working directory (or in the file named by the environment
        variable INCAR_CACHE_FILE, if set).

        Exit status:

           0  if successful or called with '--help'
           1  if the command line is invalid or the compilation or archiving failed

        Examples:

           incar src/ include/ build/out/ libexample.a
           PYTHONVERBOSE=1 incar src/ include/ build/out/ libexample.a
           incar --help
        """
    import textwrap
    help_msg = textwrap.dedent(help_msg).strip()

    try:
        import incar
        help_msg += f"\n\nincar version: {incar.__version__}."
    except (ImportError, AttributeError):
        pass

    return help_msg


def main():
    if sys.argv[1:2] == ['--help']:
        print(get_help())
        return 0

    arguments = sys.argv[1:]
    if len(arguments) != 4:
        print(get_usage(), file=sys.stderr)
        return 1

    import incar.di
    import incar.ex
    import incar_contrib.gcc
    import incar_contrib.gnubinutils

    incar.di.set_output_file(sys.stderr)

    source_directory, include_directory, output_directory, archive_name = arguments
    optional_arguments = {}
    cache_file = os.environ.get(CACHE_FILE_ENVIRONMENT_VARIABLE)
    if cache_file:
        optional_arguments['cache_file'] = cache_file

    try:
        layout = incar.ex.Layout(source_directory=source_directory, include_directory=include_directory,
                                 output_directory=output_directory, archive_name=archive_name,
                                 **optional_arguments)
        build = incar.ex.Build(layout, compiler=incar_contrib.gcc.CplusplusCompilerGcc(),
                               archiver=incar_contrib.gnubinutils.Archive())
        build.run()
    except (ValueError, incar.ex.BuildError, OSError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1

    return 0
