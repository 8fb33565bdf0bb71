"""
Role-based authorization for model classes and their actions.
"""

__version__ = "0.5.0"
