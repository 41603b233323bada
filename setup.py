from setuptools import setup, find_packages

setup(
    name="ndmeta",
    version="0.1.0",
    description="N-dimensional metadata that stays consistent through array views",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
