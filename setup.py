"""
setup.py

richtext - render rich-text editor content snapshots to HTML

Copyright 2024 The richtext authors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import List, Optional, Union

from setuptools import find_packages, setup

from richtext.__version__ import __version__


def load_requirements(file_list: Optional[Union[str, List[str]]] = None) -> List[str]:
    if file_list is None:
        file_list = ["requirements/base.in"]
    if isinstance(file_list, str):
        file_list = [file_list]
    requirements: List[str] = []
    for file in file_list:
        with open(file, encoding="utf-8") as f:
            requirements.extend(f.read().splitlines())
    requirements = [
        req
        for req in requirements
        if req.strip() and not req.startswith("#") and not req.startswith("-")
    ]
    return requirements


setup(
    name="richtext-html",
    description="Renders per-character-styled rich-text editor content to semantic HTML.",
    long_description=open("README.md", encoding="utf-8").read(),  # noqa: SIM115
    long_description_content_type="text/markdown",
    keywords="HTML rich-text editor serializer",
    python_requires=">=3.9.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Text Processing :: Markup :: HTML",
    ],
    author="The richtext authors",
    license="Apache-2.0",
    packages=find_packages(include=["richtext", "richtext.*"]),
    version=__version__,
    install_requires=load_requirements(),
    extras_require={
        "test": load_requirements("requirements/test.in"),
    },
    entry_points={
        "console_scripts": ["richtext-html=richtext.cli:main"],
    },
    package_dir={"richtext": "richtext"},
    package_data={"richtext": ["py.typed"]},
)
