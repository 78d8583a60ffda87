# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from setuptools import setup, find_packages

NAME = "quantify"
VERSION = "1.0"


setup(
    name=NAME,
    version=VERSION,
    packages=find_packages(exclude=("tests.*", "tests")),
    package_data={"quantify": ["*.yaml", "data/*.yaml"]},
    python_requires=">=3.8",
    extras_require={"test": ["pytest"]},

    license='Apache 2.0',
    description='Physical quantities, units and dimensional algebra.',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type="text/markdown",
    install_requires=[
        'confuse',
        'pyyaml',
        'numpy',
    ],
    author='Keith Dart',
    author_email='keith@dartworks.biz',
    classifiers=[
        "Programming Language :: Python",
        "License :: Apache 2.0",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Scientific/Engineering :: Physics",
    ],
)
