#!/usr/bin/env python
"""Setup script for mixing-mcp package."""

from setuptools import setup, find_packages

# Read the README file
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="mixing-mcp",
    version="0.1.0",
    author="Puran Water LLC",
    author_email="engineering@puranwater.com",
    description="MCP server for chemical injection blending and static mixer calculations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/puran-water/mixing-mcp",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["server"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "mcp>=1.0.0,<2",
        "httpx>=0.25.0",
        "pydantic>=2.0.0",
        "fluids>=1.0.26",
        "numpy>=1.24.0",
        "CoolProp>=6.4.1",
        "jinja2>=3.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mixing-mcp=server:main",
        ],
    },
)
