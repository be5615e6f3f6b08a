import re
from pathlib import Path

from setuptools import find_packages, setup


def get_metadata() -> dict:
    source = (Path(__file__).parent / "challonge_client" / "__init__.py").read_text()
    return dict(re.findall(r'^__(\w+)__ = "([^"]*)"', source, re.MULTILINE))


metadata = get_metadata()

setup(
    name="challonge-client",
    version=metadata["version"],
    packages=find_packages(exclude=["tests", "tests.*"]),
    url="https://api.challonge.com/v1",
    license=metadata["license"],
    author=metadata["author"],
    description="Asynchronous client for the Challonge tournament API",
    python_requires=">=3.9",
    install_requires=[
        "aiohttp",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "hypothesis",
            "pytest",
            "pytest-asyncio",
            "pytest-mock",
        ]
    },
    include_package_data=True
)
