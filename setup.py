# setup.py
from setuptools import setup, find_packages

setup(
    name="site_binder",
    version="0.1.0",
    description="Crawl a website and bind its readable pages into one PDF",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "readability-lxml>=0.8.4",
        "reportlab>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site_binder=site_binder.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
