"""pawprint - declarative temporary and runtime file management.

Applies line-oriented rules that create, age, clean and remove
filesystem entries.
"""

__version__ = "0.1.0"
