"""
mano-asm - Assembler for the Mano Basic Computer
================================================

This package translates assembly programs for the Mano Basic Computer, the
16-bit teaching machine from Morris Mano's *Computer System Architecture*,
into binary machine words. Each word is written as text together with its
memory address:

    <address-binary> <16-bit-word-binary>

Main Components
---------------
- **assembler**: Two-pass assembler (symbol table, decoder, encoder)
- **config**: Run configuration (output path, encoding, label policy)
- **errors**: Exception hierarchy
- **cli**: The ``manoasm`` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from mano_asm import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_file("prog.asm")
    >>> asm.write_output("a.txt")

Or use the command-line tool:
    $ manoasm prog.asm -o a.txt
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from mano_asm.assembler import Assembler, assemble, assemble_file, window
from mano_asm.config import AssemblerConfig
from mano_asm.errors import (
    ManoError,
    AssemblerError,
    SourceLocation,
    UnrecognizedMnemonicError,
    MalformedOperandError,
    MissingSymbolError,
    DuplicateSymbolError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "AssemblerConfig",
    "assemble",
    "assemble_file",
    "window",
    # Exception hierarchy
    "ManoError",
    "AssemblerError",
    "SourceLocation",
    "UnrecognizedMnemonicError",
    "MalformedOperandError",
    "MissingSymbolError",
    "DuplicateSymbolError",
]
