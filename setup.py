"""
TaskDesk setup.py — Package configuration and CLI entry point.
"""

from setuptools import find_packages, setup

setup(
    name="taskdesk",
    version="1.0.0",
    description="TaskDesk — task tracking REST API with a Reflex task board",
    packages=find_packages(include=["taskdesk", "taskdesk.*"]),
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "taskdesk=taskdesk.cli:main",
        ],
    },
    install_requires=[
        "reflex>=0.7.0",
        "sqlalchemy>=2.0",
        "pydantic>=2.5",
        "pyyaml>=6.0",
        "httpx>=0.27",
        "fastapi>=0.110",
        "uvicorn>=0.29",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
)
