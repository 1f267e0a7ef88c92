"""
Configuration module.

Threshold defaults, YAML overrides with layered precedence, and validation
of both configuration and firm rule documents.
"""
