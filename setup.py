"""Setup configuration for agent-runtime package."""

from setuptools import setup, find_packages

setup(
    name="agent-runtime",
    version="0.1.0",
    description="Agent runtime orchestration: model resolution, per-thread checkpointing and agent assembly with LangGraph",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "langchain>=0.3.0",
        "langchain-core>=0.3.0",
        "langchain-openai>=0.2.0",
        "langchain-anthropic>=0.2.0",
        "langchain-google-genai>=2.0.0",
        "langgraph>=0.3.0",
        "langgraph-checkpoint>=2.0.0",
        "langgraph-checkpoint-sqlite>=2.0.0",
        "aiosqlite>=0.20.0",
        "openai>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "black>=23.0.0",
        ],
    },
)
