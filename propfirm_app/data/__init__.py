"""
Data models and strategy normalization module.

Defines the immutable firm-rule and strategy models and converts the
upstream parser's strategy payload into canonical form.
"""
