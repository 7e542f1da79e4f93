# Configuration file for the Sphinx documentation builder.

import importlib.metadata
import os
import sys

sys.path.insert(0, os.path.abspath(".."))

from mcrand.version import VERSION

# -- Project information -----------------------------------------------------

project = "mcrand"
copyright = "2024–now, Bogdan Opanchuk"
author = "Bogdan Opanchuk"

try:
    release = importlib.metadata.version(project)
except importlib.metadata.PackageNotFoundError:
    release = ".".join(str(x) for x in VERSION)

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.doctest",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx.ext.viewcode",
]

autoclass_content = "both"
autodoc_member_order = "groupwise"
autodoc_type_aliases = dict(DTypeLike="DTypeLike")

templates_path = []

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

intersphinx_mapping = {
    "numpy": ("https://numpy.org/doc/2.0", None),
    "scipy": ("https://docs.scipy.org/doc/scipy", None),
    "python": ("https://docs.python.org/3", None),
}

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"

html_static_path = []
