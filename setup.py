# SPDX-License-Identifier: LGPL-3.0-or-later
# incar - an incremental compile-and-archive helper
# Copyright (C) 2020 The incar authors

"""A setuptools based setup module.

See:
https://packaging.python.org/en/latest/distributing.html
https://github.com/pypa/sampleproject
"""

import re
import os.path
import setuptools

here = os.path.abspath(os.path.dirname(__file__))


def get_version():
    with open(os.path.join(here, 'src', 'incar', 'version.py'), 'r', encoding='utf-8') as f:
        content = f.read()
    m = re.search(r"\n__version__ = '([^'\r\n]+)'", content)
    assert m, '__version__ line not found'
    return m.group(1)


setuptools.setup(
    name='incar',

    # Versions should comply with PEP440.  For a discussion on single-sourcing
    # the version across setup.py and the project code, see
    # https://packaging.python.org/en/latest/single_source_version.html
    version=get_version(),

    description='An incremental compile-and-archive helper',
    long_description=(
        "incar compiles the changed C++ source files of a directory and keeps a static library of their "
        "object files up to date, skipping all work when nothing has changed."
    ),

    # Author details
    author='The incar authors',

    # Choose your license
    license='LGPLv3+',

    # See https://pypi.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        # How mature is this project? Common values are
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        'Development Status :: 4 - Beta',

        # Indicate who your project is intended for
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Build Tools',
        'Environment :: Console',

        # Pick your license as you wish (should match "license" above)
        'License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)',

        'Programming Language :: Python :: 3',
    ],

    python_requires='>=3.7',

    zip_safe=True,

    # What does your project relate to?
    keywords='build development incremental static-library',

    # https://docs.python.org/3/distutils/setupscript.html#listing-whole-packages
    package_dir={'': 'src'},

    # 'incar_contrib' is a namespace package (no '__init__.py')
    packages=setuptools.find_namespace_packages(where='src', include=['incar', 'incar.*', 'incar_contrib']),

    # List run-time dependencies here.  These will be installed by pip when
    # your project is installed. For an analysis of "install_requires" vs pip's
    # requirements files see:
    # https://packaging.python.org/en/latest/requirements.html
    install_requires=[],

    # List additional groups of dependencies here (e.g. development
    # dependencies). You can install these using the following syntax,
    # for example:
    # $ pip install -e .[test]
    extras_require={
        'test': ['pytest']
    },

    # To provide executable scripts, use entry points in preference to the
    # "scripts" keyword. Entry points provide cross-platform support and allow
    # pip to create the appropriate form of executable for the target platform.
    # https://packaging.python.org/specifications/entry-points/
    entry_points={
        'console_scripts': ['incar=incar.launcher:main'],
    },
)
