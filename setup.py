# setup.py
from setuptools import setup, find_packages

setup(
    name="irl",
    version="0.3.0",
    description="Tree-walking evaluator for a small Lisp-family scripting language",
    packages=find_packages(include=["irl", "irl.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["irl=irl.cli:main"],
    },
    zip_safe=False,
)
