from setuptools import setup, find_packages

setup(
    name="ragbooks",
    version="0.1.0",
    description="Conversational front-end core for a book RAG service",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "httpx",
        "pydantic>=2",
        "rich",
        "typer",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        'console_scripts': [
            'ragbooks=ragbooks.cli:app',
        ],
    },
)
