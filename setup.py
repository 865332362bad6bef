# setup.py
from setuptools import setup, find_packages

setup(
    name="schemer",
    version="0.1.0",
    description="A tree-walking interpreter for a small Scheme",
    python_requires=">=3.10",
    packages=find_packages(include=["schemer", "schemer.*"]),
    package_data={"schemer": ["prelude/*.scm"]},
    install_requires=[],
    extras_require={"test": ["pytest", "hypothesis"]},
    entry_points={"console_scripts": ["schemer=schemer.__main__:main"]},
    zip_safe=False,
)
