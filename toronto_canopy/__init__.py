"""
Toronto Canopy Pipeline
Package for cleaning Toronto street tree, neighbourhood boundary, and census profile data.
"""

__version__ = "1.0.0"

# Lazy imports to avoid long startup times
# Import as needed in code

__all__ = ["config", "io", "cleaning", "trees", "census", "census_variables", "spatial", "qc", "pipeline"]
