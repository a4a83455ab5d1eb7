"""
Configuration — YAML loading and resolution into a validated config.
"""
