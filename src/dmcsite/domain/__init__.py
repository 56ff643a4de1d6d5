"""Domain layer — fragments, pages, links.

Pure types and functions. Must never import from infrastructure,
services, commands, or output.
"""
