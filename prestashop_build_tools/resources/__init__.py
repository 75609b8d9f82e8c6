"""Packaged default files used when a project does not ship its own."""
