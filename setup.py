# setup.py
from setuptools import find_packages, setup

setup(
    name="invoicing-backend",
    version="0.1.0",
    description="Multi-tenant invoicing API: users, tax profiles and invoices",
    python_requires=">=3.11",
    packages=find_packages(include=["invoicing", "invoicing.*"]),
    include_package_data=True,
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.29",
        "sqlalchemy[asyncio]>=2.0.20",
        "asyncpg>=0.29",
        "alembic>=1.13",
        "psycopg[binary]>=3.1",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "email-validator>=2.1",
        "structlog>=24.1",
        "sentry-sdk>=1.40",
        "authlib>=1.3",
        "werkzeug>=3.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
            "aiosqlite>=0.20",
        ],
    },
)
