import io
import os
import re

from setuptools import find_packages, setup


with io.open("flask_detailview/__init__.py", "rt", encoding="utf8") as f:
    version = re.search(r"__version__ = \"(.*?)\"", f.read()).group(1)


def fpath(name):
    return os.path.join(os.path.dirname(__file__), name)


def read(fname):
    return open(fpath(fname)).read()


def desc():
    return read("README.rst")


setup(
    name="Flask-DetailView",
    version=version,
    license="BSD",
    author="Flask-DetailView contributors",
    description=(
        "Record detail widget for Flask with in place view and edit modes,"
        " bootstrap panels, grouped and multi column rows and ajax delete."
    ),
    long_description=desc(),
    long_description_content_type="text/x-rst",
    packages=find_packages(exclude=["tests*"]),
    package_data={"flask_detailview": ["static/detailview/js/*.js", "static/detailview/css/*.css"]},
    include_package_data=True,
    zip_safe=False,
    platforms="any",
    install_requires=[
        "Babel>=2.9, <3",
        "bleach>=6, <7",
        "Flask>=2.2, <4",
        "Flask-Babel>=2, <5",
        "Flask-WTF>=1.0, <2",
        "MarkupSafe>=2, <4",
        "marshmallow>=3.18.0, <5",
        "python-dateutil>=2.3, <3",
        "SQLAlchemy>=1.4, <3",
        "WTForms>=3, <4",
        "werkzeug>=2.2, <4",
    ],
    extras_require={
        "testing": ["pytest>=7"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Framework :: Flask",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.9",
)
