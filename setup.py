from setuptools import find_packages, setup

setup(
    name="buildkite-provider",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2.5",
        "pyyaml",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    description="Buildkite REST and GraphQL client layer for infrastructure-as-code providers",
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
