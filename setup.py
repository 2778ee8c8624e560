# setup.py - Package the thin category core
from setuptools import setup, find_packages

setup(
    name="thin_categories",
    version="0.1.0",
    description="Thin categories: closure, functor enumeration and natural transformations",
    packages=find_packages(include=["thin_categories", "thin_categories.*"]),
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
