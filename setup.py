# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="sourcelog",
    version="0.1.0",
    description="Per-source log routing, tailing and age-based rotation",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["sourcelog", "sourcelog.*"]),
    python_requires=">=3.9",
    install_requires=[
        "psutil",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'sourcelog=sourcelog.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
