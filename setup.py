# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="partitionfs",
    version="0.1.0",
    description="Virtual hierarchical namespace with capacity-bounded partitions and weak shortcuts",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["partitionfs", "partitionfs.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
