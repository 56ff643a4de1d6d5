"""Infrastructure layer — fragment I/O, site layout, templates.

Bridges the pure domain types to the filesystem. Must never import
from services, commands, or output.
"""
