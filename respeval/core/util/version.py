# -*- coding: utf-8 -*-
# Calculates the current version number. If possible, this is the output of
# "git describe", modified to conform to PEP 440. If "git describe" fails
# (e.g. in an unpacked release tarball), the RELEASE-VERSION file next to the
# package __init__ is read instead.

# NO IMPORTS FROM RESPEVAL IN THIS FILE! (file gets used at installation time)
import io
import os
import re
from subprocess import STDOUT, CalledProcessError, check_output
import warnings


__all__ = ["get_git_version"]

script_dir = os.path.abspath(os.path.dirname(__file__))
RESPEVAL_ROOT = os.path.abspath(os.path.join(script_dir, os.pardir,
                                             os.pardir, os.pardir))
VERSION_FILE = os.path.join(RESPEVAL_ROOT, "respeval", "RELEASE-VERSION")


def call_git_describe(abbrev=10):
    try:
        p = check_output(['git', 'rev-parse', '--show-toplevel'],
                         cwd=RESPEVAL_ROOT, stderr=STDOUT)
        path = p.decode().strip()
    except (OSError, CalledProcessError):
        return None

    if os.path.normpath(path) != RESPEVAL_ROOT:
        return None

    try:
        p = check_output(['git', 'describe', '--dirty', '--abbrev=%d' % abbrev,
                          '--always', '--tags'],
                         cwd=RESPEVAL_ROOT, stderr=STDOUT)
        line = p.decode().strip()
    except (OSError, CalledProcessError):
        return None

    # untagged repository, "git describe" only gives the commit hash
    if "-" not in line and "." not in line:
        return "0.0.0.dev+0.g%s" % line
    parts = line.split('-', 1)
    version = parts[0]
    if len(parts) > 1:
        modifier = '+' if '.post' in version else '.post+'
        version += modifier + parts[1]
    return version


def read_release_version():
    try:
        with io.open(VERSION_FILE, "rt") as fh:
            version = fh.readline()
        return version.strip() or None
    except IOError:
        return None


def get_git_version(abbrev=10):
    version = call_git_describe(abbrev)
    if version is None:
        version = read_release_version()
    if version is None:
        warnings.warn("respeval could not determine its version number. "
                      "Make sure it is properly installed.")
        return '0.0.0+archive'
    return _normalize_version(version)


def _normalize_version(version):
    """
    Normalize version number string to adhere with PEP440 strictly.

    >>> _normalize_version('0.3.1')
    '0.3.1'
    >>> _normalize_version('0.3.1.post+12-gABCDEF-dirty')
    '0.3.1.post0+12.gabcdef.dirty'
    """
    pattern = (
        r'^[0-9]+?\.[0-9]+?\.[0-9]+?'
        r'((a|b|rc)[0-9]+?)?'
        r'(\.post[0-9]+?)?'
        r'(\.dev[0-9]+?)?$'
    )
    if re.match(pattern, version):
        return version
    match = re.match(r'(.*?\+)(.*)', version)
    if match is None:
        return version
    local_version = re.sub(r'[^a-z0-9.]', r'.', match.group(2).lower())
    version = match.group(1) + local_version
    return re.sub(r'\.post\+', r'.post0+', version)


if __name__ == "__main__":
    print(get_git_version())
