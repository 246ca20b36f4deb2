"""Prompt assembly package.

Scope:
    Maps generation kind and aspect ratio to the final provider prompt and
    output resolution.
"""
