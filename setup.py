"""Package setup for avalon."""

from setuptools import setup, find_packages

setup(
    name="avalon-gateway",
    version="1.0.0",
    description="Session client and scraper for the mbasic Facebook web interface",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "avalon=avalon.cli:main",
        ],
    },
)
