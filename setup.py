from setuptools import find_namespace_packages, setup

setup(
    name="fsshape",
    version="0.1.0",
    description="Measure depth, fan-out and size distributions of directory trees",
    python_requires=">=3.11",
    packages=find_namespace_packages(include=["fsshape", "fsshape.*"]),
    install_requires=[
        "result>=0.17",
        "rich>=13.7",
        "typer>=0.12",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "fsshape=fsshape.cli.app:cli",
        ],
    },
)
