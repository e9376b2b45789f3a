"""
Tokenizer constants.

This module contains the punctuation classes and timing multipliers used
by the tokenizer, the ORP calculator and the reader's timing policy.
"""

# Tokenizer version - increment when logic changes
TOKENIZER_VERSION = "2.0.0"

# -----------------------------------------------------------------------------
# Punctuation Classification
# -----------------------------------------------------------------------------

# Sentence terminators (ASCII ellipsis "..." is covered via '.')
SENTENCE_TERMINATORS = {'.', '!', '?', '\u2026'}  # \u2026 = …

# Clause separators
CLAUSE_SEPARATORS = {',', ';', ':'}

# -----------------------------------------------------------------------------
# Timing Multipliers (in multiples of the base word duration)
# -----------------------------------------------------------------------------

SENTENCE_PAUSE_BONUS = 1.0
CLAUSE_PAUSE_BONUS = 0.5
PARAGRAPH_BREAK_MULTIPLIER = 1.5

# -----------------------------------------------------------------------------
# ORP
# -----------------------------------------------------------------------------

# Fraction of the core word length at which the eye fixates
ORP_RATIO = 0.35

# -----------------------------------------------------------------------------
# Brackets and Quotes
# -----------------------------------------------------------------------------

BRACKET_CLOSERS = {')', ']', '}'}

# Closing quotes (appear after word)
CLOSING_QUOTES = {
    '"',        # ASCII double quote
    "'",        # ASCII single quote
    '\u201c',   # " left double quotation mark (can be closing in some contexts)
    '\u201d',   # " right double quotation mark
    '\u00bb',   # » right-pointing double angle quotation mark
    '\u00ab',   # « left-pointing double angle quotation mark (closing in some languages)
    '\u203a',   # › single right-pointing angle quotation mark
    '\u2019',   # ' right single quotation mark
}

# Characters to look through when looking for terminal punctuation
TRAILING_CLOSERS = CLOSING_QUOTES | BRACKET_CLOSERS

# -----------------------------------------------------------------------------
# Paragraph Detection
# -----------------------------------------------------------------------------

# Separator placed between blocks in the normalized text
PARAGRAPH_SEPARATOR = "\n\n"
