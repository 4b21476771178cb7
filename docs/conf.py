"""Sphinx configuration file for hashgrid documentation."""

import os
import sys

# Add the package to the Python path
sys.path.insert(0, os.path.abspath(".."))

project = "hashgrid"
copyright = "2025, hashgrid developers"
author = "hashgrid developers"
release = version = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx.ext.doctest",
    "sphinx_autodoc_typehints",
    "sphinx_copybutton",
]

exclude_patterns = ["_build"]
language = "en"

html_theme = "furo"
html_title = f"{project} {version}"

# Table methods read best in the order they are defined
autodoc_member_order = "bysource"
autodoc_default_options = {
    "members": True,
    "special-members": "__init__, __getitem__, __setitem__",
    "undoc-members": False,
}

# hashgrid docstrings are NumPy style
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_rtype = True

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "pandas": ("https://pandas.pydata.org/docs/", None),
}

autodoc_typehints = "description"
typehints_fully_qualified = False

copybutton_prompt_text = r">>> |\.\.\. |\$ "
copybutton_prompt_is_regexp = True
