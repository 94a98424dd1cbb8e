"""
Setup script for the carebody-core package.

Pure-Python lifecycle core: phase evaluation, action resolution and
countdowns for health campaigns and telemedicine consultations.
"""

from setuptools import setup, find_packages

setup(
    name="carebody-core",
    version="1.0.0",
    description="CareBody lifecycle core - phases, actions and countdowns for campaigns and consultations",
    author="CareBody Team",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
