"""Setup configuration for sipp-runner."""

from setuptools import setup, find_packages

setup(
    name="sipp-runner",
    version="0.1.0",
    description="Runs and supervises SIPp load tests",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sipp-runner=sipp_runner.cli:main",
        ],
    },
)
