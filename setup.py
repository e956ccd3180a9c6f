from setuptools import setup, find_packages

setup(
    name="faultline",
    version="0.1.0",
    packages=find_packages(include=["faultline", "faultline.*"]),
    include_package_data=True,
    install_requires=[
        "structlog>=24.2.0",
        "pydantic>=2.0.0",
        "typer>=0.9.0",
        "rich>=13.0.0",
        "pyyaml>=6.0.1",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "faultline=faultline.cli:main",
        ],
    },
    python_requires=">=3.11",
)
