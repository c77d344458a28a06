"""
Setup script for the node embedding package.
"""

from setuptools import setup, find_packages

setup(
    name="node_embedding",
    version="1.0.0",
    description="DeepWalk random walks and skip-gram training for node embeddings",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"config": ["*.yaml"]},
    python_requires=">=3.8",
    install_requires=[
        "torch>=2.0.0",
        "networkx>=3.0",
        "numpy>=1.23.0",
        "pyyaml>=6.0",
        "scikit-learn>=1.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "node-embedding-train=scripts.train:main",
            "node-embedding-samples=scripts.generate_samples:main",
        ],
    },
)
