"""
Instruction Decoder
===================

Turns one raw source line into a structured, class-specific record.

Decoded Records
---------------
Each catalog partition has its own record type, so code handling one
class only sees the fields valid for it:

- MemoryInstruction: mnemonic, operand label, addressing mode
- RegisterInstruction: mnemonic only
- PseudoInstruction: directive name and optional operand (no addressing mode)

All records carry the resident address of the statement. For a
label-prefixed line this is the label's first-pass address; otherwise it
is the current location counter.

Example
-------
>>> from mano_asm.assembler.decoder import decode_line
>>> record = decode_line("LDA PTR I / load", 3, symbols)
>>> record.mnemonic, record.operand, record.addressing_mode
('LDA', 'PTR', INDIRECT)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from mano_asm.assembler.lexer import INDIRECT_FLAG, split_label, tokenize
from mano_asm.assembler.opcodes import InstructionClass, classify
from mano_asm.assembler.symbols import SymbolTable
from mano_asm.errors import SourceLocation


class AddressingMode(Enum):
    """Memory-reference addressing mode, valued by its I bit."""
    DIRECT = "0"
    INDIRECT = "1"

    def __repr__(self) -> str:
        return self.name

    @property
    def bit(self) -> str:
        return self.value


def address_text(address: int) -> str:
    """
    Render an address as natural-width binary (no padding).

    Negative addresses, which only arise from a negative ORG, render as
    32-bit two's complement.
    """
    if address < 0:
        address &= 0xFFFFFFFF
    return format(address, "b")


# =============================================================================
# Decoded Instruction Records
# =============================================================================

@dataclass(frozen=True)
class MemoryInstruction:
    """Memory-reference instruction (AND, ADD, LDA, STA, BUN, BSA, ISZ)."""
    address: int
    mnemonic: str
    operand: Optional[str]
    addressing_mode: AddressingMode = AddressingMode.DIRECT
    location: Optional[SourceLocation] = None
    source_line: Optional[str] = None

    instruction_class = InstructionClass.MRI

    @property
    def location_text(self) -> str:
        return address_text(self.address)


@dataclass(frozen=True)
class RegisterInstruction:
    """Register-reference or IO instruction with a fixed 16-bit pattern."""
    address: int
    mnemonic: str
    location: Optional[SourceLocation] = None
    source_line: Optional[str] = None

    instruction_class = InstructionClass.NON_MRI

    @property
    def location_text(self) -> str:
        return address_text(self.address)


@dataclass(frozen=True)
class PseudoInstruction:
    """Assembler directive (ORG, END, DEC, HEX)."""
    address: int
    mnemonic: str
    operand: Optional[str] = None
    location: Optional[SourceLocation] = None
    source_line: Optional[str] = None

    instruction_class = InstructionClass.PSEUDO

    @property
    def location_text(self) -> str:
        return address_text(self.address)


DecodedInstruction = Union[MemoryInstruction, RegisterInstruction, PseudoInstruction]


# =============================================================================
# Decoding
# =============================================================================

def decode_line(
    line: str,
    location_counter: int,
    symbols: SymbolTable,
    location: Optional[SourceLocation] = None,
) -> DecodedInstruction:
    """
    Decode one statement into its class-specific record.

    Args:
        line: Raw source line (must be a statement, see is_statement())
        location_counter: Current location counter
        symbols: First-pass symbol table, used for label-prefixed lines
        location: Source location for error reporting (optional)

    Returns:
        A MemoryInstruction, RegisterInstruction or PseudoInstruction

    Raises:
        UnrecognizedMnemonicError: If the mnemonic is in no catalog partition
        MissingSymbolError: If the line's own label is not in the table
    """
    source_line = line.rstrip("\n")
    label, statement = split_label(line)

    if label is not None:
        address = symbols.resolve(label, location, source_line)
    else:
        address = location_counter

    tokens = tokenize(statement)
    mnemonic = tokens[0] if tokens else ""
    operand = tokens[1] if len(tokens) > 1 else None

    instruction_class = classify(mnemonic, location, source_line)

    if instruction_class is InstructionClass.MRI:
        indirect = len(tokens) > 2 and tokens[2] == INDIRECT_FLAG
        return MemoryInstruction(
            address=address,
            mnemonic=mnemonic,
            operand=operand,
            addressing_mode=AddressingMode.INDIRECT if indirect else AddressingMode.DIRECT,
            location=location,
            source_line=source_line,
        )

    if instruction_class is InstructionClass.NON_MRI:
        return RegisterInstruction(
            address=address,
            mnemonic=mnemonic,
            location=location,
            source_line=source_line,
        )

    return PseudoInstruction(
        address=address,
        mnemonic=mnemonic,
        operand=operand,
        location=location,
        source_line=source_line,
    )
