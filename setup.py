#!/usr/bin/env python
"""A setuptools-based script for installing gurutext."""

# Note: this is used for RPM builds on platforms where the
#       pyproject-rpm-macros are not available by default.
#
#       With this file, we can use the older py3_build/py3_install
#       but leverage the pyproject.toml content.

import setuptools

if __name__ == "__main__":
    setuptools.setup()
