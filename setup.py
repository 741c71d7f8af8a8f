"""Setup script for the httpc package."""

from setuptools import setup, find_packages

requires = ["click>=8.0"]

__version__ = None
exec(open("src/httpc/version.py").read())

setup(
    name="httpc",
    version=__version__,
    description="Minimal HTTP/1.1 command-line client over plain TCP sockets",
    package_dir={"": "src"},
    packages=find_packages("src"),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=requires,
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["httpc = httpc.client:main"]},
)
