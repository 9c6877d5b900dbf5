from setuptools import setup, find_packages

setup(
    name="quizme-backend",
    version="1.0.0",
    packages=find_packages(include=["quizme", "quizme.*"]),
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.15.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "sqlalchemy[asyncio]>=2.0.0",
        "aiosqlite>=0.17.0",
        "alembic>=1.7.0",
        "python-dotenv>=0.19.0",
        "aiohttp>=3.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.23.0",
        ],
    },
    python_requires=">=3.8",
)
