#!/usr/bin/env python

from setuptools import setup

setup(
    name="embedderer",
    version="0.1.0",
    packages=[
        "embedderer",
        "embedderer.details",
        "embedderer.details.passes",
        "embedderer.details.tools",
        "embedderer.xcode",
    ],
    python_requires=">=3.9",
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["embedderer = embedderer.__main__:main"]},
)
