"""Core IR, timestamp codec, and format-agnostic cue helpers.

WHY: Every format module needs the same cue model, the same timestamp
spellings, and the same entity/tag handling. Keeping these here means
format modules only describe their own syntax.

HOW: ir.py defines the data structures, timecode.py converts between
milliseconds and timestamp text, text.py and scanner.py handle inline
markup, timing.py and cleanup.py derive or repair timing.

RULES:
- Nothing in core imports from formats/; the dependency points one way
- IR dataclasses are the contract; change with care
"""
