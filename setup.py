"""setuptools setup for timemanagement.

Install for development:
    pip install -e ".[test]"
"""

from setuptools import setup, find_packages

setup(
    name="timemanagement",
    version="0.1.0",
    description="Frame-driven timer state machine with Qt signals",
    packages=find_packages(include=["timemanagement", "timemanagement.*"]),
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["timemanagement-demo=timemanagement.__main__:main"],
    },
)
