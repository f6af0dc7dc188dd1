"""
Mano Basic Computer Assembler
=============================

Two-pass assembler for the 16-bit Mano Basic Computer.

Main Components
---------------
- **Assembler**: Runs both passes and collects the emitted words
- **build_symbol_table**: Pass 1, assigns addresses to labels
- **decode_line**: Splits one statement into a class-specific record
- **encode**: Pass 2, turns a record into a 16-bit binary word
- **window**: Fixed-width binary rendering used for every field

Assembly Process
----------------
1. **Pass 1**: label -> address table (ORG moves the counter, END stops)
2. **Pass 2**: decode -> classify -> encode per statement until END

Example Usage
-------------
>>> from mano_asm.assembler import assemble
>>> assemble("CLA\\nINC\\nHLT\\nEND")
['0 0111100000000000', '1 0111000000100000', '10 0111000000000001']
"""

from mano_asm.assembler.assembler import Assembler, assemble, assemble_file
from mano_asm.assembler.codegen import EncodeStep, OutputWord, encode, window
from mano_asm.assembler.decoder import (
    AddressingMode,
    DecodedInstruction,
    MemoryInstruction,
    PseudoInstruction,
    RegisterInstruction,
    address_text,
    decode_line,
)
from mano_asm.assembler.opcodes import (
    InstructionClass,
    MRI_OPCODES,
    NON_MRI_PATTERNS,
    PSEUDO_OPS,
    classify,
)
from mano_asm.assembler.symbols import Symbol, SymbolTable, build_symbol_table

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Pass 1
    "Symbol",
    "SymbolTable",
    "build_symbol_table",
    # Decoder
    "AddressingMode",
    "DecodedInstruction",
    "MemoryInstruction",
    "PseudoInstruction",
    "RegisterInstruction",
    "address_text",
    "decode_line",
    # Encoder
    "EncodeStep",
    "OutputWord",
    "encode",
    "window",
    # Catalog
    "InstructionClass",
    "MRI_OPCODES",
    "NON_MRI_PATTERNS",
    "PSEUDO_OPS",
    "classify",
]
