"""Image understanding package.

Scope:
    Sends one uploaded image plus a fixed instruction to a vision-capable model
    and returns its textual description.
"""
