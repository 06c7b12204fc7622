from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="routeflow",
    version="0.3.0",
    description="Binary route-activation planning and validation for supply-chain graphs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    package_data={"routeflow.schemas": ["*.json"]},
    python_requires=">=3.11",
    install_requires=[
        "jsonschema",
        "networkx",
        "numpy",
        "pandas",
        "PyYAML",
    ],
    extras_require={"test": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["routeflow=routeflow.cli:main"]},
)
