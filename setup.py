"""Setup configuration for prompt-relay"""
from setuptools import setup, find_packages

setup(
    name="prompt-relay",
    version="0.1.0",
    description="HTTP relay that forwards prompts to a local Ollama server",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi>=0.110.0",
        "pydantic>=2.5.0",
        "uvicorn>=0.27.0",
        "httpx>=0.27.0",
        "click>=8.1.7",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "prompt-relay=prompt_relay.cli:cli",
        ],
    },
    python_requires=">=3.9",
)
