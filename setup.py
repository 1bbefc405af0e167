# setup.py
"""
sourcetrust
Setup configuration for installation and distribution.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

# Read requirements from requirements.txt
def read_requirements(filename):
    """Read requirements from file, ignoring comments and empty lines."""
    requirements = []
    path = os.path.join(this_directory, filename)
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and not line.startswith("-r"):
                    requirements.append(line)
    return requirements

setup(
    name="sourcetrust",
    version="0.1.0",
    description="Trusted source registry: certificates trusted to sign content from each package source",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="sourcetrust Development Team",
    license="MIT",
    # Core package structure
    packages=find_packages(where="src") + ["scripts"],
    package_dir={
        "": "src",
        "scripts": "scripts"
    },
    python_requires=">=3.10",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "dev": read_requirements("requirements-dev.txt"),
    },
    entry_points={
        "console_scripts": [
            "trusted-sources=scripts.trusted_sources:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security",
        "Topic :: Software Development :: Build Tools",
    ],
    keywords="package-signing trusted-signers certificates configuration",
    zip_safe=False,
)
