from setuptools import setup, find_namespace_packages

setup(
    name="skillswap",
    version="0.2",
    packages=find_namespace_packages(include=["app", "app.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt==4.0.1",  # passlib 1.7 breaks on bcrypt>=4.1
        "pydantic[email]>=2",
        "pydantic-settings",
        "python-dotenv",
        "alembic"
    ],
    extras_require={
        "test": ["pytest", "httpx"],
    },
)
