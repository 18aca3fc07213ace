"""
Configuration package

Filter parameters, index geometry, colors, key bindings and output paths
shared by the inspector modules.
"""

from .settings import *
