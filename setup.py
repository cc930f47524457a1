"""Setup script for pedy-pricing package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="pedy-pricing",
    version="1.0.0",
    description="Menu order pricing and checkout quotes",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5.0",
        "python-dotenv>=1.0.0",
        "click>=8.1.0",
        "aiofiles>=23.2.0",
        "tzdata>=2024.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pedy=pedy.cli.commands:main",
        ],
    },
)
