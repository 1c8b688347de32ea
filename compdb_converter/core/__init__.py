"""Core data model and shell-word tokenizer.

WHY: The entry model and the tokenizer are the stable heart of the
converter. Both the record codec and the Database façade build on them.

HOW: entry.py defines Entry and DatabaseFormat, shell_words.py moves
between a command line and a token vector.

RULES:
- Nothing in core touches the filesystem or JSON
- Entry equality is the dedup contract, change with care
"""
