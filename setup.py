#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
FastgClusters: clusters of connected contigs from Fastg assembly graphs

Retrieves connected components from MEGAHIT/SPAdes Fastg assembly graphs and
reports them as putative genome bins, ranked by total sequence length.

Version: 0.1
License: GNU General Public License v2 or later
"""

from setuptools import setup, find_packages
import os
import sys

# Ensure we can import version
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "fastgclusters"))

from version import __version__

# Read long description from README
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

# Read requirements from requirements.txt
def read_requirements(filename):
    """Read requirements from file."""
    filepath = os.path.join(os.path.dirname(__file__), filename)
    if not os.path.exists(filepath):
        return []
    with open(filepath, "r") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]

# Basic requirements (always installed)
install_requires = read_requirements("requirements.txt")

# Optional dependencies
extras_require = {
    "dev": read_requirements("requirements-dev.txt"),
}

setup(
    name="fastgclusters",
    version=__version__,
    author="FastgClusters Development Team",
    description="Clusters of connected contigs from MEGAHIT/SPAdes Fastg assembly graphs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "fastgclusters=fastgclusters.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="metagenomics binning assembly graph fastg megahit spades",
)
