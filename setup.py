"""Setup script for the project."""

from setuptools import setup, find_packages

setup(
    name="fitgenius",
    version="1.0.0",
    description="Workout logging and AI coaching client with a reference data backend",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "httpx>=0.27",
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "langchain-core>=0.2",
        "langchain-openai>=0.1",
        "redis>=5.0.1",
    ],
    extras_require={
        "anthropic": ["langchain-anthropic>=0.1"],
        "test": ["pytest>=7.4", "pytest-asyncio>=0.23"],
    },
    python_requires=">=3.10",
)
