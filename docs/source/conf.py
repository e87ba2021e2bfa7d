# Sphinx configuration for the combparse documentation.

import os
import re
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

# -- Project information -----------------------------------------------------

project = "combparse"
author = "combparse developers"

# Read version from pyproject.toml
pyproject_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '..', 'pyproject.toml')
with open(pyproject_path, 'r') as f:
    content = f.read()
    version_match = re.search(r'^version = ["\']([^"\']+)["\']', content, re.MULTILINE)
    if version_match:
        release = version_match.group(1)
    else:
        release = "0.1.0"

# General configuration
extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
]

# the solver libraries are not needed to render the API pages
autodoc_mock_imports = ['z3', 'pysat', 'sympy']

templates_path = ['_templates']
exclude_patterns = []

# HTML output options
html_theme = 'sphinx_rtd_theme'
html_title = 'combparse Documentation'
