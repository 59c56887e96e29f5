import os
from setuptools import setup, find_namespace_packages

# locate files relative to this setup.py
HERE = os.path.abspath(os.path.dirname(__file__))


def parse_requirements(rel_path):
    path = os.path.join(HERE, rel_path)
    with open(path, "r") as f:
        lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


def read_long_description():
    path = os.path.join(HERE, "README.md")
    if not os.path.isfile(path):
        return ""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


setup(
    name="redefine",
    version="0.1.0",
    description="Extract documentation metadata of React components using Tree-sitter",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["redefine", "redefine.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=parse_requirements("redefine/requirements.txt"),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "redefine=redefine.main:main",
        ],
    },
    include_package_data=True,
    package_data={"redefine": ["requirements.txt"]},
)
