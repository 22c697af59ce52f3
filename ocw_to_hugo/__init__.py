"""
ocw-to-hugo - Convert OCW course exports into Hugo markdown

This package indexes every course in a run, rewrites links between pages,
files and courses using that index, and writes Hugo content folders.
"""

__version__ = "1.0.0"
__author__ = "Dale Chapman"
