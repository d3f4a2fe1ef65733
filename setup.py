#!/usr/bin/env python
# Copyright 2005-2009,2011 Joe Wreschnig
#           2026 flacmeta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

import os
import sys

from setuptools import setup, Command


class test_cmd(Command):
    description = "run the flacmeta test suite with pytest"
    user_options = [
        ("to-run=", None, "comma separated test name patterns (default all)"),
        ("exitfirst", "x", "stop after first failing test"),
        ("quick", "q", "use the 'quick' hypothesis profile"),
    ]

    def initialize_options(self):
        self.to_run = []
        self.exitfirst = False
        self.quick = False

    def finalize_options(self):
        if self.to_run:
            self.to_run = self.to_run.split(",")
        self.exitfirst = bool(self.exitfirst)

    def run(self):
        if self.quick:
            os.environ["FLACMETA_HYPOTHESIS_PROFILE"] = "quick"

        import tests

        status = tests.unit(self.to_run, self.exitfirst)
        if status != 0:
            raise SystemExit(status)


if __name__ == "__main__":
    if sys.version_info < (3, 10):
        raise Exception("Python 3.10 or newer required")

    # required for PEP 517
    sys.path.insert(0, os.path.dirname(os.path.realpath(__file__)))

    from flacmeta import version_string

    with open('README.rst', encoding='utf-8') as h:
        long_description = h.read()

    setup(cmdclass={"test": test_cmd},
          name="flacmeta",
          version=version_string,
          description="read FLAC stream information and Vorbis comments",
          license="GPL-2.0-or-later",
          classifiers=[
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3',
            'Programming Language :: Python :: Implementation :: CPython',
            'Programming Language :: Python :: Implementation :: PyPy',
            ('License :: OSI Approved :: '
             'GNU General Public License v2 or later (GPLv2+)'),
            'Topic :: Multimedia :: Sound/Audio',
          ],
          packages=[
            "flacmeta",
          ],
          python_requires=(
            '>=3.10'),
          extras_require={
            "tests": [
              "pytest",
              "hypothesis",
              "flake8",
            ],
          },
          long_description=long_description,
    )
