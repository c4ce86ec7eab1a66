#!/usr/bin/env python3
"""
Setup script for objscale (uniform OBJect SCALE extraction and editing)
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "numpy>=1.20.0",
    "trimesh>=3.15.0",
    "matplotlib>=3.5.0",
    "plotly>=5.0.0",
]

setup(
    name="objscale",
    version="0.1.0",
    description="Read and edit the uniform scale of 3D object transformations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["objscale", "objscale.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Multimedia :: Graphics :: 3D Modeling",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ],
    },
)
