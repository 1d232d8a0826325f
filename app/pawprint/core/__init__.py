"""Core orchestration: dispatch, configuration files, settings and theme."""
