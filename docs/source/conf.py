# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information

from importlib.metadata import version as dist_version

project = "chrootid"
copyright = "2022, Martín Paradiso"
author = "Martín Paradiso"

extra_vars = {
    "module_name": "chrootid",
    "min_python_version": "3.11",
    "version": dist_version("chrootid"),
    "version_output": f"``chrootid {dist_version('chrootid')}``",
}

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

extensions = [
    "sphinx.ext.napoleon",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.autosectionlabel",
    "sphinx.ext.todo",
    "sphinx.ext.intersphinx",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Options for extensions
todo_include_todos = True
autosectionlabel_prefix_document = True

autoclass_content = "both"
autodoc_member_order = "bysource"

intersphinx_mapping = {"python": ("https://docs.python.org/3.11", None)}

# -- Options for HTML output -------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#options-for-html-output

html_theme = "sphinx_rtd_theme"

# -- Variables -----------------------------------------------------------------

rst_prolog = "\n".join([f".. |{k}| replace:: {v}" for k, v in extra_vars.items()])
