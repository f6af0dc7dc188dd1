"""
Mano Basic Computer Instruction Set
===================================

This module defines the instruction catalog of the Mano Basic Computer, the
16-bit teaching machine described in Morris Mano's *Computer System
Architecture*. Every instruction word is 16 bits wide.

Instruction Classes
-------------------
1. **Memory-reference (MRI)**: ``I | opcode(3) | address(12)``
   - The I bit selects direct (0) or indirect (1) addressing
   - Example: ``LDA VAL I`` -> 1 010 <address of VAL>

2. **Register and IO (NON_MRI)**: a fixed 16-bit pattern per mnemonic
   - Register instructions start with 0111, IO instructions with 1111
   - Example: ``CLA`` -> 0111 1000 0000 0000

3. **Pseudo-ops**: assembler directives that never reach the machine
   - ORG n: set the location counter to decimal n
   - END: stop assembling
   - DEC n: emit a 16-bit word holding decimal n
   - HEX n: emit a 16-bit word holding hexadecimal n

The three partitions are disjoint, so a mnemonic belongs to exactly one
class.
"""

from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping

from mano_asm.errors import SourceLocation, UnrecognizedMnemonicError


WORD_BITS = 16
ADDRESS_BITS = 12


# =============================================================================
# Instruction Class Enumeration
# =============================================================================

class InstructionClass(Enum):
    """Catalog partition a mnemonic belongs to."""
    MRI = auto()      # Memory-reference instruction
    NON_MRI = auto()  # Register or IO instruction
    PSEUDO = auto()   # Assembler directive

    def __str__(self) -> str:
        return {
            InstructionClass.MRI: "memory-reference",
            InstructionClass.NON_MRI: "register/IO",
            InstructionClass.PSEUDO: "pseudo-op",
        }[self]


# =============================================================================
# Opcode Tables
# =============================================================================
# Memory-reference instructions: mnemonic -> 3-bit opcode.
# Opcode 111 is not listed; it selects the register/IO group below.
# =============================================================================

MRI_OPCODES: Mapping[str, str] = MappingProxyType({
    "AND": "000",   # AND memory word to AC
    "ADD": "001",   # Add memory word to AC
    "LDA": "010",   # Load memory word to AC
    "STA": "011",   # Store AC in memory
    "BUN": "100",   # Branch unconditionally
    "BSA": "101",   # Branch and save return address
    "ISZ": "110",   # Increment and skip if zero
})

# =============================================================================
# Register-reference (0111 ...) and IO (1111 ...) instructions:
# mnemonic -> complete 16-bit instruction word.
# =============================================================================

NON_MRI_PATTERNS: Mapping[str, str] = MappingProxyType({
    # Register-reference
    "CLA": "0111100000000000",  # Clear AC
    "CLE": "0111010000000000",  # Clear E
    "CMA": "0111001000000000",  # Complement AC
    "CME": "0111000100000000",  # Complement E
    "CIR": "0111000010000000",  # Circulate right AC and E
    "CIL": "0111000001000000",  # Circulate left AC and E
    "INC": "0111000000100000",  # Increment AC
    "SPA": "0111000000010000",  # Skip next instruction if AC positive
    "SNA": "0111000000001000",  # Skip next instruction if AC negative
    "SZA": "0111000000000100",  # Skip next instruction if AC zero
    "SZE": "0111000000000010",  # Skip next instruction if E is 0
    "HLT": "0111000000000001",  # Halt computer

    # Input-output
    "INP": "1111100000000000",  # Input character to AC
    "OUT": "1111010000000000",  # Output character from AC
    "SKI": "1111001000000000",  # Skip on input flag
    "SKO": "1111000100000000",  # Skip on output flag
    "ION": "1111000010000000",  # Interrupt on
    "IOF": "1111000001000000",  # Interrupt off
})

PSEUDO_OPS: frozenset[str] = frozenset({"ORG", "END", "HEX", "DEC"})

# Directives that emit a data word, mapped to the radix of their operand
DATA_DIRECTIVE_RADIX: Mapping[str, int] = MappingProxyType({
    "DEC": 10,
    "HEX": 16,
})


# =============================================================================
# Lookup Functions
# =============================================================================

def classify(
    mnemonic: str,
    location: SourceLocation | None = None,
    source_line: str | None = None,
) -> InstructionClass:
    """
    Determine which catalog partition a mnemonic belongs to.

    Args:
        mnemonic: The operation token, e.g. "LDA"
        location: Source location for error reporting (optional)
        source_line: Source text for error reporting (optional)

    Returns:
        The InstructionClass of the mnemonic

    Raises:
        UnrecognizedMnemonicError: If the mnemonic is in no partition
    """
    if mnemonic in MRI_OPCODES:
        return InstructionClass.MRI
    if mnemonic in NON_MRI_PATTERNS:
        return InstructionClass.NON_MRI
    if mnemonic in PSEUDO_OPS:
        return InstructionClass.PSEUDO
    raise UnrecognizedMnemonicError(mnemonic, location=location, source_line=source_line)
