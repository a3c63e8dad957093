# -*- coding: utf-8 -*-

import re

from setuptools import find_packages, setup

extras_require = {
    "test": [
        "pytest>=7.0,<9.0",
        "pytest-cov>=4.0,<6.0",
        "pytest-xdist>=3.0,<4.0",
        "hypothesis>=6.0,<7.0",
    ],
    "lint": [
        "black==23.12.0",
        "flake8==6.1.0",
        "flake8-bugbear==23.12.2",
        "flake8-use-fstring==1.4",
        "isort==5.13.2",
        "mypy==1.5",
    ],
    "dev": ["ipython", "pre-commit", "twine"],
}

extras_require["dev"] = extras_require["test"] + extras_require["lint"] + extras_require["dev"]

with open("README.md", "r") as f:
    long_description = f.read()


def _read_version():
    with open("potable/version.py", "r") as f:
        match = re.search(r'^version = "([^"]+)"', f.read(), re.MULTILINE)
    assert match is not None
    return match.group(1)


setup(
    name="potable",
    version=_read_version(),
    description="potable: parse, merge and look up gettext translation catalogs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="potable contributors",
    author_email="",
    license="Apache License 2.0",
    keywords="gettext po pot translation i18n catalog",
    include_package_data=True,
    packages=find_packages(include=["potable", "potable.*"]),
    python_requires=">=3.10,<4",
    install_requires=["lark>=1.1.9,<2"],
    tests_require=extras_require["test"],
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "potable-merge=potable.cli.potable_merge:_parse_cli_args",
            "potable-check=potable.cli.potable_check:_parse_cli_args",
        ]
    },
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Localization",
    ],
)
