import tomllib
from setuptools import setup, find_packages

# Safely read the long description from README.md, if present
try:
    with open("README.md", encoding="utf-8") as f:
        long_description = f.read()
except FileNotFoundError:
    long_description = ""

# Parse version from pyproject.toml so release bumps need only modify that file
with open("pyproject.toml", "rb") as fp:
    VERSION = tomllib.load(fp)["project"]["version"]

setup(
    name="prestashop-build-tools",
    version=VERSION,
    description="Build, vendor-prefix and scaffold PrestaShop modules",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["prestashop_build_tools", "prestashop_build_tools.*"]),
    package_data={"prestashop_build_tools.resources": ["*.txt", "*.php"]},
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0",
        "structlog>=23.1",
        "rich>=13.0",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "prestashop-build-tools = prestashop_build_tools.cli:main",
            "pbt = prestashop_build_tools.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
