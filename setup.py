"""
Setup script for skillgate.

skillgate is the decision layer behind an adaptive assessment flow:

1. Self-assessment - per-topic ratings turned into a level and difficulty map
2. Adaptive quizzes - topic/readiness filtering and level-weighted sampling
3. Eligibility - quiz, coding and attendance gates for leave applications

The 'skillgate' command exposes the engine over JSON files.
"""

from setuptools import find_packages, setup

setup(
    name="skillgate",
    version="1.0.0",
    description="Adaptive assessment and eligibility engine",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["skillgate", "skillgate.*"]),
    py_modules=["config"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "skillgate=skillgate.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="assessment adaptive-quiz eligibility cli education",
)
