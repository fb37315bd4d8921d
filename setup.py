from setuptools import setup, find_packages

setup(
    name="stat_engine",
    version="0.1.0",
    description="Attribute and stat aggregation engine for gameplay values",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "PySide6",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
