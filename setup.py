from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="flowmatch",
    version="0.1.0",
    author="flowmatch contributors",
    description="Dinic max flow for bipartite matching and quota assignment problems.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=["networkx"],
    extras_require={"dev": ["pytest", "networkx"]},
    tests_require=["pytest", "networkx"],
    entry_points={"console_scripts": ["flowmatch=flowmatch.cli:main"]},
)
