#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup

def get_README():
    content = ""
    with open("README.md") as f:
        content += f.read()
    return content

setup(
    name="zmod",
    python_requires=">=3.8",
    version="0.1.0",
    license="BSD",
    description="Modular integers with overflow-safe fixed-width storage and Chinese remaindering.",
    long_description=get_README(),
    long_description_content_type="text/markdown",
    packages=["zmod"],
    package_data={"zmod": ["py.typed"]},
    zip_safe=False,
    install_requires=[
        "BitVector>=3.4.9",
        "typing-extensions>=3.7.4",
    ],
    extras_require={
        "test": [
            "mypy>=0.812",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
    ],
)
