#!/usr/bin/env python3
"""
Setup script for CollegeMate

Install with:
    pip install -e .

Or with the test tooling:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

requirements = [
    "pydantic[email]>=2.5.0",
    "pydantic-settings>=2.1.0",
    "rich>=13.7.0",
    "redis>=5.0.0",
    "python-dotenv>=1.0.0",
]

setup(
    name="collegemate",
    version="1.0.0",
    description="CollegeMate - student portal with email-code login and a daily class bunk poll",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="CollegeMate Team",
    license="MIT",
    packages=find_packages(include=["collegemate", "collegemate.*"]),
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "Faker>=22.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "collegemate=collegemate.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Utilities",
    ],
    keywords="college student-portal otp poll cli",
)
