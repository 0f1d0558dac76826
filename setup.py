"""
Setup script for blog-users project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="blog-users",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    python_requires=">=3.11",
    install_requires=[
        "pymongo>=4.9",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
)
