"""
Setup.py for protocol-risk.
"""
from setuptools import setup, find_packages

setup(
    name="protocol-risk",
    version="0.1.0",
    description="Risk assessment client for DeFi protocols with an interactive TUI",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "textual>=0.47.0",
        "rich>=13.0.0",
        "typer>=0.9.0",
        "pydantic>=2.0",
        "httpx>=0.24.0",
        "PyYAML>=6.0",
        "tomli>=2.0.0",
        "python-dotenv>=1.0.0",
        "keyring>=24.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "pytest-mock>=3.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "protocol-risk=protocol_risk.cli:app",
        ],
    },
    zip_safe=False,
)
