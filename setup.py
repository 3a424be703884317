#!/usr/bin/env python3

import sys
from importlib.util import module_from_spec, spec_from_file_location

from setuptools import find_packages, setup


def load_module(name, path):
    spec = spec_from_file_location(name, path)
    mod = module_from_spec(spec)
    sys.modules[name] = mod
    spec.loader.exec_module(mod)
    return mod


def read_dependencies(fname):
    dependencies = []
    with open(fname, 'r') as f:
        for line in f:
            stripped = line.strip()
            if stripped.startswith('#') or len(stripped) == 0:
                continue
            dependencies.append(stripped)
    return dependencies


setup(
    name='libraryclient',
    version=load_module('version', 'libraryclient/version.py').__pip_version__,
    description="Client for the container library API: entities, collections, containers, images, tags and search.",
    packages=find_packages('.', include=['libraryclient', 'libraryclient.*']),
    package_dir={'libraryclient': 'libraryclient'},
    package_data={"libraryclient": ["py.typed"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
    ],
    python_requires=">=3.10",
    install_requires=read_dependencies('requirements.txt'),
    extras_require={'test': read_dependencies('requirements-test.txt')},
    entry_points={'console_scripts': ['libraryctl = libraryclient.libraryctl.__main__:main']},
    include_package_data=True,
)
