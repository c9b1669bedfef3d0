from setuptools import setup, find_packages

setup(
    name="fourinarow",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "gymnasium",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "fourinarow=fourinarow.interfaces.cli:main",
        ],
    },
)
