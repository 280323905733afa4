from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup

# Read README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    # Package metadata
    name="pr-system",
    version="1.0.0",
    author="1PWR Africa",
    description="Notification formatting, Job Card handoff and admin endpoints for the PR System",
    long_description=long_description,
    long_description_content_type="text/markdown",
    # Package discovery
    packages=find_packages(include=["prsystem", "prsystem.*"]),
    # Dependencies
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.24.0",
        "pydantic>=2.5.0",
        "python-dotenv>=1.0.0",
        "httpx>=0.25.0",
        "cachetools>=5.3.0",
        "python-dateutil>=2.8.0",
        "babel>=2.12.0",
        "firebase-admin>=6.5.0",
        "google-cloud-firestore>=2.16.0",
        "google-api-core>=2.11.0",
    ],
    # Optional dependencies (for development)
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "cryptography>=41.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    # CLI commands
    entry_points={
        "console_scripts": [
            "pr-system-api=prsystem.api.app:main",
            "pr-list-benin-orgs=prsystem.maintenance.list_benin_orgs:main",
        ],
    },
    # Python version requirement
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
)
