"""Project model for C++ packages: manifests, layouts, workspaces and dependency resolution."""

__version__ = "0.8.2"