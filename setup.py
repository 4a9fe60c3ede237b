#!/usr/bin/env python
"""
Kaede Runtime: primitive text, math, console and filesystem operations for compiled Kaede programs
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Define required packages
required_packages = [
    "pydantic>=2.0.0",  # For configuration validation
    "pyyaml>=6.0",      # For configuration file support
    "rich>=13.5.0",     # For the dbg trace on the diagnostic stream
    "cachetools>=5.5.2", # For caching compiled format templates
]

setup(
    name="kaede-runtime",
    version="1.0.0",
    author="DarsheeeGamer",
    author_email="cleaverdeath@gmail.com",
    description="Runtime primitives for programs compiled by the Kaede compiler",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["kaede_runtime", "kaede_runtime.*"]),
    python_requires=">=3.11",
    install_requires=required_packages,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
