#!/usr/bin/python3
# Setup file for proxyclone
# Copyright (C) 2026 The proxyclone authors
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later

from setuptools import setup

tests_require = ["pytest"]

setup(
    name="proxyclone",
    version="0.1.0",
    description="Clone git repositories over HTTP(S) through environment-configured proxies",
    license="Apache-2.0 OR GPL-2.0-or-later",
    python_requires=">=3.10",
    packages=["proxyclone"],
    install_requires=[
        "dulwich>=0.24.0",
        "urllib3>=2.2.2",
    ],
    extras_require={"test": tests_require},
    entry_points={
        "console_scripts": ["proxyclone=proxyclone.cli:_main"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX",
        "Topic :: Software Development :: Version Control",
    ],
)
