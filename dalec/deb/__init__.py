"""Generators for the contents of Debian packaging files."""