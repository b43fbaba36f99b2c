# pylint: disable=missing-module-docstring
# ruff: noqa

from pathlib import Path

from setuptools import find_packages, setup


def read_long_description() -> str:
    """Return README contents for PyPI description."""
    readme_path = Path(__file__).with_name("README.md")
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else "TrendPulse"


setup(
    name="trendpulse",
    version="0.1.0",
    description="Trend metrics engine for a social-media marketing dashboard",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    packages=find_packages(include=["trend_engine", "trend_engine.*", "fetchers", "fetchers.*", "trendpulse", "trendpulse.*"]),
    include_package_data=True,
    install_requires=[
        "pydantic>=2.0",
        "pandas>=2.0",
        "httpx>=0.26",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "trendpulse-report = trendpulse.cli_entrypoints:report",
            "trendpulse-sparkline = trendpulse.cli_entrypoints:sparkline",
            "trendpulse-brief-status = trendpulse.cli_entrypoints:brief_status",
            "trendpulse-posts = trendpulse.cli_entrypoints:posts",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
