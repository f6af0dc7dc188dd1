"""
Mano Code Generator
===================

Second-pass encoding of decoded statements into 16-bit binary words.

Word Layouts
------------
Memory-reference:   I | opcode(3) | address(12)
Register/IO:        fixed 16-bit pattern from the catalog
DEC n / HEX n:      n as a 16-bit two's-complement word

Each emitted word is rendered as text together with its address:

    <address-binary> <16-bit word>

where the address is unpadded binary, e.g. ``11 0111100000000000`` for
CLA at address 3.

Location Counter
----------------
encode() never mutates shared state. It takes the current location
counter and returns the counter for the next statement inside an
EncodeStep, so a pass is a plain fold over the source lines.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from mano_asm.assembler.decoder import (
    DecodedInstruction,
    MemoryInstruction,
    PseudoInstruction,
    RegisterInstruction,
    address_text,
)
from mano_asm.assembler.lexer import parse_number
from mano_asm.assembler.opcodes import (
    ADDRESS_BITS,
    DATA_DIRECTIVE_RADIX,
    MRI_OPCODES,
    NON_MRI_PATTERNS,
    WORD_BITS,
)
from mano_asm.assembler.symbols import SymbolTable
from mano_asm.errors import MalformedOperandError

logger = logging.getLogger(__name__)


def window(value: int, length: int) -> str:
    """
    Render value as exactly `length` binary digits.

    Non-negative values keep their low `length` bits, zero-padded on the
    left. Negative values keep the low `length` bits of their two's
    complement, which gives the usual fixed-width signed encoding.

        window(5, 16)  -> "0000000000000101"
        window(-1, 16) -> "1111111111111111"
        window(4097, 12) -> "000000000001"
    """
    return format(value & ((1 << length) - 1), f"0{length}b")


@dataclass(frozen=True)
class OutputWord:
    """
    One emitted machine word.

    Attributes:
        address: Address as unpadded binary text
        word: The 16-bit word as binary text
    """
    address: str
    word: str

    def __str__(self) -> str:
        return f"{self.address} {self.word}"


@dataclass(frozen=True)
class EncodeStep:
    """
    Result of encoding one statement.

    Attributes:
        word: The emitted word, or None for ORG and END
        location_counter: Counter value for the next statement
        halted: True once END has been encoded
    """
    word: Optional[OutputWord]
    location_counter: int
    halted: bool = False


def encode(
    instruction: DecodedInstruction,
    location_counter: int,
    symbols: SymbolTable,
) -> EncodeStep:
    """
    Encode one decoded statement.

    Args:
        instruction: Record produced by decode_line()
        location_counter: Current location counter
        symbols: Completed first-pass symbol table

    Returns:
        EncodeStep with the emitted word (if any) and the next counter

    Raises:
        MissingSymbolError: If a memory-reference operand is undefined
        MalformedOperandError: If an operand is missing or not numeric
    """
    if isinstance(instruction, MemoryInstruction):
        return _encode_memory(instruction, location_counter, symbols)
    if isinstance(instruction, RegisterInstruction):
        return _encode_register(instruction, location_counter)
    if isinstance(instruction, PseudoInstruction):
        return _encode_pseudo(instruction, location_counter)
    raise TypeError(f"cannot encode {type(instruction).__name__}")


def _encode_memory(
    instruction: MemoryInstruction,
    location_counter: int,
    symbols: SymbolTable,
) -> EncodeStep:
    """Encode I | opcode | 12-bit operand address."""
    if instruction.operand is None:
        raise MalformedOperandError(
            instruction.mnemonic,
            None,
            location=instruction.location,
            source_line=instruction.source_line,
        )

    target = symbols.resolve(
        instruction.operand, instruction.location, instruction.source_line
    )
    word = (
        instruction.addressing_mode.bit
        + MRI_OPCODES[instruction.mnemonic]
        + window(target, ADDRESS_BITS)
    )
    return EncodeStep(OutputWord(instruction.location_text, word), location_counter + 1)


def _encode_register(instruction: RegisterInstruction, location_counter: int) -> EncodeStep:
    """Encode a register/IO instruction from its fixed pattern."""
    word = NON_MRI_PATTERNS[instruction.mnemonic]
    return EncodeStep(OutputWord(instruction.location_text, word), location_counter + 1)


def _encode_pseudo(instruction: PseudoInstruction, location_counter: int) -> EncodeStep:
    """Apply ORG/END or emit a DEC/HEX data word."""
    mnemonic = instruction.mnemonic

    if mnemonic == "ORG":
        origin = parse_number(
            mnemonic, instruction.operand, 10,
            instruction.location, instruction.source_line,
        )
        logger.debug(f"Pass 2: ORG {origin} ({address_text(origin)})")
        return EncodeStep(None, origin)

    if mnemonic == "END":
        return EncodeStep(None, location_counter, halted=True)

    value = parse_number(
        mnemonic, instruction.operand, DATA_DIRECTIVE_RADIX[mnemonic],
        instruction.location, instruction.source_line,
    )
    word = window(value, WORD_BITS)
    return EncodeStep(OutputWord(instruction.location_text, word), location_counter + 1)
