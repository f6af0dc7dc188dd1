"""
Mano Assembly Line Lexer
========================

Line-level tokenizing shared by both assembler passes.

Statement Grammar
-----------------
One statement per line:

    [LLL,] MNEMONIC [OPERAND] [I] [/comment]

- ``LLL,``: optional label, exactly three characters followed by a comma
- ``MNEMONIC``: three-letter operation or pseudo-op
- ``OPERAND``: label, decimal number or hexadecimal number
- ``I``: literal indirect-addressing flag (memory-reference only)
- ``/comment``: everything from a token starting with ``/`` is ignored

Tokens are separated by any run of whitespace.

Example
-------
>>> from mano_asm.assembler.lexer import split_label, tokenize
>>> split_label("LOP, LDA PTR I  / fetch")
('LOP', 'LDA PTR I  / fetch')
>>> tokenize("LDA PTR I  / fetch")
['LDA', 'PTR', 'I']
"""

import re
from typing import Optional

from mano_asm.errors import MalformedOperandError, SourceLocation


LABEL_LENGTH = 3
LABEL_TERMINATOR = ","
COMMENT_CHAR = "/"
INDIRECT_FLAG = "I"

# Plain signed digit strings; no 0x prefixes or underscores
NUMBER_PATTERNS = {
    10: re.compile(r"[+-]?[0-9]+"),
    16: re.compile(r"[+-]?[0-9A-Fa-f]+"),
}


def has_label(line: str) -> bool:
    """
    Check if a line starts with a label definition.

    A label is exactly three characters followed by a comma, so the
    stripped line must have a comma at index 3. Lines without that
    shape are label-free.
    """
    text = line.strip()
    return len(text) > LABEL_LENGTH and text[LABEL_LENGTH] == LABEL_TERMINATOR


def split_label(line: str) -> tuple[Optional[str], str]:
    """
    Separate the label prefix from the rest of a statement.

    Args:
        line: Raw source line

    Returns:
        (label, remainder) where label is None for label-free lines and
        remainder is the statement text with surrounding whitespace removed
    """
    text = line.strip()
    if not has_label(text):
        return None, text
    return text[:LABEL_LENGTH], text[LABEL_LENGTH + 1:].strip()


def tokenize(statement: str) -> list[str]:
    """
    Split a label-free statement into its meaningful tokens.

    The first token starting with the comment character and everything
    after it are dropped. The mnemonic itself is never treated as a
    comment marker here; whole-line comments are filtered by
    is_statement().
    """
    tokens = statement.split()
    for index, token in enumerate(tokens[1:], start=1):
        if token.startswith(COMMENT_CHAR):
            return tokens[:index]
    return tokens


def is_statement(line: str) -> bool:
    """
    Check if a line holds a statement.

    Blank lines and whole-line comments are not statements; both
    passes skip them without touching the location counter.
    """
    text = line.strip()
    return bool(text) and not text.startswith(COMMENT_CHAR)


def leading_mnemonic(statement: str) -> str:
    """Return the operation token of a label-free statement ("" if none)."""
    tokens = tokenize(statement)
    return tokens[0] if tokens else ""


def operand_of(statement: str) -> Optional[str]:
    """Return the operand token of a label-free statement, if present."""
    tokens = tokenize(statement)
    return tokens[1] if len(tokens) > 1 else None


def parse_number(
    mnemonic: str,
    operand: Optional[str],
    radix: int = 10,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> int:
    """
    Parse a numeric directive operand.

    Args:
        mnemonic: The directive owning the operand (for error messages)
        operand: Operand text, or None when the statement had none
        radix: 10 for ORG and DEC, 16 for HEX (no prefixes or underscores)
        location: Source location for error reporting (optional)
        source_line: Source text for error reporting (optional)

    Returns:
        The integer value (may be negative)

    Raises:
        MalformedOperandError: If the operand is missing or not a number
    """
    if operand is None:
        raise MalformedOperandError(mnemonic, None, location=location, source_line=source_line)
    if not NUMBER_PATTERNS[radix].fullmatch(operand):
        raise MalformedOperandError(
            mnemonic, operand, location=location, source_line=source_line
        )
    return int(operand, radix)
