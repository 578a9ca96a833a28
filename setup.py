# Copyright Amazon.com Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License"). You
# may not use this file except in compliance with the License. A copy of
# the License is located at
#
#     http://aws.amazon.com/apache2.0/
#
# or in the "license" file accompanying this file. This file is
# distributed on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF
# ANY KIND, either express or implied. See the License for the specific
# language governing permissions and limitations under the License.

from setuptools import find_packages, setup

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("src/fourier_shaders/_version.py") as f:
    version = f.readlines()[-1].split()[-1].strip("\"'")

setup(
    name="fourier-shader-simulator",
    version=version,
    license="Apache License 2.0",
    python_requires=">= 3.9",
    packages=find_packages(where="src", exclude=("test",)),
    package_dir={"": "src"},
    install_requires=[
        "numpy",
        "numba",
        "opt_einsum",
    ],
    extras_require={
        "test": [
            "black",
            "coverage",
            "flake8",
            "isort",
            "pre-commit",
            "pylint",
            "pytest",
            "pytest-cov",
            "pytest-xdist",
            "sphinx",
            "sphinx-rtd-theme",
            "sphinxcontrib-apidoc",
            "tox",
        ]
    },
    author="Amazon Web Services",
    description=(
        "Quantum Fourier transform gates for a state vector simulator, "
        "applied as CPU and CUDA kernel passes"
    ),
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="Quantum Fourier Transform Simulator CUDA",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
