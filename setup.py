from __future__ import annotations

import os
from pathlib import Path

from setuptools import find_packages, setup


BASE_DIR = Path(__file__).resolve().parent


def read_version() -> str:
    """Read the version, preferring the environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    return "1.0.0"


setup(
    name="wordpair-coverage",
    version=read_version(),
    description="Find word pairs that together cover the most distinct letters of a text.",
    long_description="Find word pairs that together cover the most distinct letters of a text.",
    long_description_content_type="text/plain",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "wordpair-coverage=wordpair_coverage.cli:main",
        ],
    },
)
