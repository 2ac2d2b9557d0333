#!/usr/bin/env python3
"""
Setup script for lvt.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_file.exists():
    requirements = [
        line.strip()
        for line in requirements_file.read_text().splitlines()
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="lvt",
    version="0.1.0",
    description="Scaffolding CLI for LiveTemplate apps: resources, migrations, seeding and deployment stacks",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="lvt Contributors",
    packages=find_packages(include=["lvt", "lvt.*"]),
    package_data={
        "lvt": [
            "templates/*/*.j2",
            "kits/system/*/kit.yaml",
        ],
    },
    python_requires=">=3.10",
    install_requires=requirements or [
        "click>=8.1.0",
        "jinja2>=3.1.0",
        "aiosqlite>=0.19.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
        "Faker>=20.0.0",
        "fastmcp>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "lvt=lvt.cli.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Environment :: Console",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
    ],
    keywords="livetemplate scaffolding code-generation sqlite migrations cli",
)
