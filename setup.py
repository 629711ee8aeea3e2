from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="citygraph",
    version="0.1.0",
    description="Shortest paths between named locations in a weighted city graph.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests",)),
    python_requires=">=3.9",
    install_requires=["networkx", "PyYAML", "pandas", "numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["citygraph=citygraph.cli:main"]},
)
