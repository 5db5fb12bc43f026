"""
Presentation adapters: rich rendering of items and usage reports, and a
prompt_toolkit collector for usage choices.
"""
