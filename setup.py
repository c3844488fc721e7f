# setup.py - Package residue_atlas
from setuptools import setup, find_packages

setup(
    name="residue_atlas",
    version="0.1.0",
    packages=find_packages(include=["residue_atlas", "residue_atlas.*"]),
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
