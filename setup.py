"""
Setup script for the Biochar CORC Quantification Engine.

Installation:
    pip install -e .

Test installation:
    pip install -e ".[test]"
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="biochar-corc",
    version="1.0.0",
    description="Biochar CORC quantification engine - Puro.earth Biochar Methodology Edition 2025 V1",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",

    # Package configuration
    packages=find_packages(include=["biochar_corc", "biochar_corc.*"]),

    # Dependencies
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],

    # Test dependencies
    extras_require={
        "test": [
            "pytest>=7.4.4",
            "pytest-cov>=4.1.0",
        ],
    },

    # Python version requirement
    python_requires=">=3.9",

    # Classifiers
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Atmospheric Science",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],

    # Keywords
    keywords=[
        "biochar",
        "carbon-removal",
        "corc",
        "puro-earth",
        "mrv",
    ],
)
