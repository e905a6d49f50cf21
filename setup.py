import io
import os
import re

from setuptools import find_packages, setup


with io.open("flask_jstree/__init__.py", "rt", encoding="utf8") as f:
    version = re.search(r"__version__ = \"(.*?)\"", f.read()).group(1)


def fpath(name):
    return os.path.join(os.path.dirname(__file__), name)


def read(fname):
    with io.open(fpath(fname), "rt", encoding="utf8") as f:
        return f.read()


def desc():
    return read("README.rst")


setup(
    name="Flask-JsTree",
    version=version,
    license="BSD",
    author="Flask-JsTree contributors",
    description=(
        "jsTree widget for Flask, bound to JSON endpoints for adjacency list"
        " and nested set trees."
    ),
    long_description=desc(),
    long_description_content_type="text/x-rst",
    packages=find_packages(exclude=["tests*"]),
    package_data={"flask_jstree": ["templates/jstree/*"]},
    include_package_data=True,
    zip_safe=False,
    platforms="any",
    install_requires=[
        "Flask>=2.2, <4",
        "Flask-Babel>=3, <5",
        "Jinja2>=3, <4",
        "markupsafe>=2, <4",
    ],
    extras_require={
        "testing": ["pytest>=7"],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Web Environment",
        "Framework :: Flask",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
)
