# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dirstat",
    version="1.0.0",
    description="Scan a directory tree and explore its disk usage on a proportional bar",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dirstat", "dirstat.*"]),
    install_requires=[
        "customtkinter",  # GUI host
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "dirstat=dirstat.main:main",
            "dirstat-cli=dirstat.interface.cli.app:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
