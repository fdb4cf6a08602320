from setuptools import find_packages, setup

setup(
    name="grammar-checker-backend",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["app", "bootloader", "database"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic[email]>=2.5",
        "SQLAlchemy>=2.0",
        "psycopg2-binary>=2.9",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "python-jose[cryptography]>=3.3",
        "bcrypt>=4.0",
        "python-multipart>=0.0.9",
        "openai>=1.30",
        "langchain-core>=0.2",
        "langchain-google-genai>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
    package_data={"services.grammar_check": ["config/*.yaml"]},
    include_package_data=True,
    description="Grammar checker backend (AI grammar suggestions and history)",
)
