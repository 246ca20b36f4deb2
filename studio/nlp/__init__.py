"""Prompt language handling.

Scope:
    Detects non-English (Arabic-script) prompts and translates them to English
    before prompt assembly.
"""
