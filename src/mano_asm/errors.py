"""
Mano Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the assembler. All
exceptions inherit from ManoError, allowing callers to catch every
assembler failure with a single except clause.

Exception Hierarchy
-------------------
ManoError (base)
└── AssemblerError (assembler-related)
    ├── UnrecognizedMnemonicError - mnemonic not in any catalog partition
    ├── MalformedOperandError - missing or non-numeric operand
    ├── MissingSymbolError - reference to an undefined label
    └── DuplicateSymbolError - label defined more than once

All errors are fatal. The assembler never collects errors or continues
past the first one; any failure aborts the whole run.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ManoError(Exception):
    """
    Base exception for all assembler errors.

        try:
            assembler.assemble_file("program.asm")
        except ManoError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(ManoError):
    """
    Base exception for all assembly errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.asm:4:1: error: undefined symbol 'LOQ'
                LDA LOQ I
                ^
            hint: did you mean 'LOP'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnrecognizedMnemonicError(AssemblerError):
    """
    Mnemonic absent from all three catalog partitions.

    Raised by the decoder when a statement's operation is neither a
    memory-reference instruction, a register/IO instruction, nor a
    pseudo-op.
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        super().__init__(
            f"unrecognized mnemonic '{mnemonic}'",
            location=location,
            hint="mnemonics are three upper-case letters, e.g. LDA, CLA, ORG",
            source_line=source_line,
        )


class MalformedOperandError(AssemblerError):
    """
    Missing or non-numeric operand.

    Examples:
        ORG TEN     ; ORG requires a decimal integer
        HEX 1G      ; not a hexadecimal number
        LDA         ; memory-reference instruction without an operand
    """

    def __init__(
        self,
        mnemonic: str,
        operand: Optional[str],
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.operand = operand

        if operand is None:
            message = f"'{mnemonic}' requires an operand"
        else:
            message = f"malformed operand '{operand}' for '{mnemonic}'"

        super().__init__(message, location=location, source_line=source_line)


class MissingSymbolError(AssemblerError):
    """
    Reference to an undefined label.

    Raised during the second pass when a memory-reference operand names
    a label that the first pass never recorded. Similarly-named labels
    are suggested to help catch typos.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.symbol = symbol
        self.similar_symbols = similar_symbols or []

        hint = None
        if self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label defined more than once.

    Includes the address of the original definition so the user can
    find both occurrences.
    """

    def __init__(
        self,
        symbol: str,
        original_address: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_address = original_address

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=f"'{symbol}' was first defined at address {original_address}",
            source_line=source_line,
        )
