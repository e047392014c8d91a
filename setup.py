# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="treefs",
    version="0.1.0",
    description="In-memory directory tree simulator with XML persistence and an interactive shell",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treefs", "treefs.*"]),
    package_data={"treefs.interface": ["locales/*.json"]},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'treefs=treefs.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
