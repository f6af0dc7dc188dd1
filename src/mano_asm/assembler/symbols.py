"""
Symbol Table and First Pass
===========================

The first pass walks the source once, assigning a memory address to every
label. The finished table is read-only during the second pass.

Address Assignment
------------------
The location counter starts at 0 and advances by one word per statement:

    ORG 100         / counter = 100, no word
    LOP, LDA VAL    / LOP = 100, counter = 101
         BUN LOP    / counter = 102
    VAL, DEC 7      / VAL = 102, counter = 103
         END        / stop

A label-prefixed line always occupies one word, whatever its mnemonic.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from mano_asm.assembler.lexer import (
    has_label,
    is_statement,
    leading_mnemonic,
    operand_of,
    parse_number,
    split_label,
)
from mano_asm.errors import DuplicateSymbolError, MissingSymbolError, SourceLocation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Three-character label
        address: Memory address assigned in the first pass
        location: Where the label was defined (None for manual entries)
    """
    name: str
    address: int
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Mapping from label to memory address.

    Lookups of undefined labels raise MissingSymbolError rather than
    KeyError so the failure carries source context.
    """

    def __init__(self, allow_redefinition: bool = False):
        self._symbols: dict[str, Symbol] = {}
        self._allow_redefinition = allow_redefinition

    def define(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> None:
        """
        Record a label at an address.

        Raises:
            DuplicateSymbolError: If the label exists and redefinition
                is not allowed
        """
        existing = self._symbols.get(name)
        if existing is not None:
            if not self._allow_redefinition:
                raise DuplicateSymbolError(
                    name, existing.address, location=location, source_line=source_line
                )
            logger.warning(
                f"Label '{name}' redefined: {existing.address} -> {address}"
            )
        self._symbols[name] = Symbol(name, address, location)

    def resolve(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> int:
        """
        Return the address of a label.

        Raises:
            MissingSymbolError: If the label was never defined
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            raise MissingSymbolError(
                name,
                location=location,
                source_line=source_line,
                similar_symbols=self._find_similar(name),
            )
        return symbol.address

    def _find_similar(self, name: str) -> list[str]:
        """Labels differing from name by one character (typo candidates)."""
        similar = []
        for candidate in self._symbols:
            if len(candidate) != len(name):
                continue
            mismatches = sum(1 for a, b in zip(candidate, name) if a != b)
            if mismatches == 1 or candidate.upper() == name.upper():
                similar.append(candidate)
        return sorted(similar)[:3]

    def as_dict(self) -> dict[str, int]:
        """Return a plain label -> address copy of the table."""
        return {name: sym.address for name, sym in self._symbols.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __repr__(self) -> str:
        return f"SymbolTable({self.as_dict()!r})"


def build_symbol_table(
    lines: Iterable[str],
    filename: str = "<input>",
    allow_redefinition: bool = False,
) -> SymbolTable:
    """
    First pass: assign an address to every label.

    Args:
        lines: Source lines in program order
        filename: Source name for error locations
        allow_redefinition: Let a later definition of a label replace an
            earlier one instead of raising DuplicateSymbolError

    Returns:
        The completed SymbolTable

    Raises:
        DuplicateSymbolError: On a repeated label (unless allowed)
        MalformedOperandError: If an ORG operand is not a decimal integer
    """
    symbols = SymbolTable(allow_redefinition=allow_redefinition)
    location_counter = 0

    for line_number, line in enumerate(lines, start=1):
        if not is_statement(line):
            continue

        location = SourceLocation(filename, line_number)

        if has_label(line):
            label, statement = split_label(line)
            symbols.define(label, location_counter, location, line.rstrip("\n"))
            logger.debug(f"Pass 1: {label} = {location_counter}")
            location_counter += 1
            if leading_mnemonic(statement) == "END":
                logger.debug(f"Pass 1: END at line {line_number}")
                break
            continue

        _, statement = split_label(line)
        mnemonic = leading_mnemonic(statement)

        if mnemonic == "ORG":
            location_counter = parse_number(
                mnemonic, operand_of(statement), 10, location, line.rstrip("\n")
            )
            logger.debug(f"Pass 1: ORG {location_counter}")
        elif mnemonic == "END":
            logger.debug(f"Pass 1: END at line {line_number}")
            break
        else:
            location_counter += 1

    logger.debug(f"Pass 1 complete: {len(symbols)} symbols")
    return symbols
