#! /usr/bin/env python
# -*- coding: utf-8 -*-
"""
respeval - evaluation of seismic instrument responses in Python.

respeval calculates the complex frequency response of seismic instruments
described as a cascade of response stages (poles and zeros, FIR and IIR
coefficients, response lists and polynomials). Responses are checked for
consistency, stage gains are normalized to a common reference frequency and
the response can be evaluated in displacement, velocity or acceleration at
arbitrary frequencies, reproducing the numerical behavior of evalresp.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""

import inspect
import os
import sys

from setuptools import find_packages, setup


# The minimum python version which can be used to run respeval
MIN_PYTHON_VERSION = (3, 8)

# Fail fast if the user is on an unsupported version of python.
if sys.version_info < MIN_PYTHON_VERSION:
    msg = ("respeval requires python version >= {}".format(
        MIN_PYTHON_VERSION) +
        " you are using python version {}".format(sys.version_info))
    print(msg, file=sys.stderr)
    sys.exit(1)

# Directory of the current file in the (hopefully) most reliable way
# possible
SETUP_DIRECTORY = os.path.dirname(os.path.abspath(inspect.getfile(
    inspect.currentframe())))

# Import the version string.
# Any .py files that are used at install time must not import respeval!
UTIL_PATH = os.path.join(SETUP_DIRECTORY, "respeval", "core", "util")
sys.path.insert(0, UTIL_PATH)
from version import get_git_version  # @UnresolvedImport
sys.path.pop(0)

DOCSTRING = __doc__.split("\n")

# Hard dependencies needed to install/run respeval.
INSTALL_REQUIRES = [
    'numpy>=1.20',
    'decorator',
]
# Extra dependencies
EXTRAS_REQUIRES = {
    'tests': [
        'packaging',
        'pytest',
        'scipy>=1.7',
    ],
}
EXTRAS_REQUIRES['all'] = [dep for depl in EXTRAS_REQUIRES.values()
                          for dep in depl]


# package specific settings
KEYWORDS = [
    'evalresp', 'FIR', 'frequency response', 'IIR', 'instrument correction',
    'instrument response', 'poles and zeros', 'RESP', 'response file',
    'SEED', 'seismology', 'sensitivity', 'StationXML']


def setupPackage():
    # setup package
    setup(
        name='respeval',
        version=get_git_version(),
        description=DOCSTRING[1],
        long_description="\n".join(DOCSTRING[3:]),
        author='The respeval Development Team',
        license='GNU Lesser General Public License, Version 3 (LGPLv3)',
        platforms='OS Independent',
        classifiers=[
            'Development Status :: 4 - Beta',
            'Intended Audience :: Science/Research',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: '
                'GNU Lesser General Public License v3 (LGPLv3)',
            'Operating System :: OS Independent',
            'Programming Language :: Python',
            'Programming Language :: Python :: 3',
            'Topic :: Scientific/Engineering',
            'Topic :: Scientific/Engineering :: Physics'],
        keywords=KEYWORDS,
        packages=find_packages(include=['respeval', 'respeval.*']),
        package_data={'respeval': ['RELEASE-VERSION']},
        zip_safe=False,
        python_requires=f'>={MIN_PYTHON_VERSION[0]}.{MIN_PYTHON_VERSION[1]}',
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRES,
    )


if __name__ == '__main__':
    setupPackage()
