# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import io
import os

from setuptools import find_packages
from setuptools import setup


DEPENDENCIES = (
    "aiohttp >= 3.8.0, < 4.0.0",
    "cryptography >= 38.0.3",
    "requests >= 2.20.0, < 3.0.0",
)

TESTING_REQUIREMENTS = (
    "aioresponses",
    "freezegun",
    "mock >= 4.0.0",
    "pytest",
    "pytest-asyncio",
    "pytest-cov",
)

extras = {"testing": TESTING_REQUIREMENTS}

with io.open("README.rst", "r", encoding="utf-8") as fh:
    long_description = fh.read()

package_root = os.path.abspath(os.path.dirname(__file__))

version = {}
with open(os.path.join(package_root, "gmail_client/version.py")) as fp:
    exec(fp.read(), version)
version = version["__version__"]

setup(
    name="gmail-service-account-client",
    version=version,
    description="Send email as a Google Workspace user with a service account.",
    long_description=long_description,
    packages=find_packages(exclude=("tests*", "tests_async*", "docs*")),
    package_data={"gmail_client": ["py.typed"]},
    install_requires=DEPENDENCIES,
    extras_require=extras,
    python_requires=">=3.8",
    license="Apache 2.0",
    keywords="google gmail auth service account jwt oauth",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Topic :: Communications :: Email",
        "Topic :: Internet :: WWW/HTTP",
    ],
)
