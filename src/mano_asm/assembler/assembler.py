"""
Mano Assembler - Main Interface
===============================

This module provides the Assembler class, the primary interface for
assembling Mano Basic Computer programs. It runs the two passes and
collects the emitted words.

Assembly Process
----------------
1. **Pass 1** (build_symbol_table): assign an address to every label
2. **Pass 2** (decode_line + encode): decode each statement, encode it
   against the finished symbol table and append the word, until END
   or the end of the source

Each call to assemble() starts from scratch; nothing carries over from a
previous run.

Example Usage
-------------
>>> from mano_asm.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string('''
...         ORG 100
... LOP,    LDA VAL I   / load through pointer
...         CLA
... VAL,    DEC -1
...         END
... ''')
['1100100 1010000001100110', '1100101 0111100000000000', '1100110 1111111111111111']
>>> asm.write_output("a.txt")
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from mano_asm.assembler.codegen import OutputWord, encode
from mano_asm.assembler.decoder import address_text, decode_line
from mano_asm.assembler.lexer import is_statement
from mano_asm.assembler.symbols import SymbolTable, build_symbol_table
from mano_asm.config import AssemblerConfig
from mano_asm.errors import SourceLocation

logger = logging.getLogger(__name__)


class Assembler:
    """
    Two-pass assembler for the Mano Basic Computer.

    Attributes:
        config: Run configuration (output path, encoding, label policy)
    """

    def __init__(self, config: Optional[AssemblerConfig] = None, verbose: bool = False):
        """
        Initialize the assembler.

        Args:
            config: Run configuration; defaults to AssemblerConfig()
            verbose: Log progress at INFO level
        """
        self.config = config or AssemblerConfig()
        self._verbose = verbose
        self._symbols = SymbolTable()
        self._words: list[OutputWord] = []
        self._listing: list[tuple[OutputWord, str]] = []
        self._source_file: Optional[Path] = None

    # =========================================================================
    # Assembly
    # =========================================================================

    def assemble(self, lines: Iterable[str], filename: str = "<input>") -> list[str]:
        """
        Assemble a sequence of source lines.

        Args:
            lines: Source lines in program order
            filename: Source name for error messages

        Returns:
            Output lines "<address> <word>" in program order

        Raises:
            AssemblerError: On the first failure; no partial output is kept
        """
        program = list(lines)
        self._symbols = SymbolTable()
        self._words = []
        self._listing = []

        self._symbols = build_symbol_table(
            program,
            filename=filename,
            allow_redefinition=self.config.allow_redefinition,
        )
        words, listing = self._pass2(program, filename)

        self._words = words
        self._listing = listing

        if self._verbose:
            logger.info(
                f"Assembled {filename}: {len(words)} words, {len(self._symbols)} symbols"
            )
        return self.get_output()

    def _pass2(
        self, program: list[str], filename: str
    ) -> tuple[list[OutputWord], list[tuple[OutputWord, str]]]:
        """Second pass: decode and encode each statement until END."""
        words: list[OutputWord] = []
        listing: list[tuple[OutputWord, str]] = []
        location_counter = 0

        for line_number, line in enumerate(program, start=1):
            if not is_statement(line):
                continue

            location = SourceLocation(filename, line_number)
            instruction = decode_line(line, location_counter, self._symbols, location)
            step = encode(instruction, location_counter, self._symbols)

            if step.word is not None:
                words.append(step.word)
                listing.append((step.word, line.strip()))
                logger.debug(f"Pass 2: {step.word}  <- {line.strip()}")

            if step.halted:
                logger.debug(f"Pass 2: END at line {line_number}")
                break
            location_counter = step.location_counter

        return words, listing

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code given as a single string.

        Args:
            source: Assembly source, one statement per line
            filename: Source name for error messages

        Returns:
            Output lines "<address> <word>" in program order
        """
        return self.assemble(source.splitlines(), filename)

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble a source file.

        Args:
            filepath: Path to the assembly source

        Returns:
            Output lines "<address> <word>" in program order

        Raises:
            FileNotFoundError: If the file does not exist
            AssemblerError: On the first assembly failure
        """
        path = Path(filepath)
        self._source_file = path
        logger.debug(f"Reading {path}")
        source = path.read_text(encoding=self.config.encoding)
        return self.assemble_string(source, str(path))

    # =========================================================================
    # Results
    # =========================================================================

    def get_output(self) -> list[str]:
        """Return the output lines of the last run."""
        return [str(word) for word in self._words]

    def get_words(self) -> list[OutputWord]:
        """Return the emitted words of the last run."""
        return list(self._words)

    def get_symbols(self) -> dict[str, int]:
        """Return the label -> address table of the last run."""
        return self._symbols.as_dict()

    def get_listing(self) -> str:
        """
        Return a listing pairing each word with the statement that produced it.

            1100100 1010000001100110    LOP,    LDA VAL I   / load through pointer
        """
        if not self._listing:
            return ""
        width = max(len(str(word)) for word, _ in self._listing)
        return "\n".join(
            f"{str(word):<{width}}    {source}" for word, source in self._listing
        ) + "\n"

    # =========================================================================
    # Output Files
    # =========================================================================

    def write_output(self, filepath: str | Path | None = None) -> Path:
        """
        Write the output lines to a file, one word per line.

        Args:
            filepath: Destination; defaults to config.output_path

        Returns:
            The path written
        """
        path = Path(filepath) if filepath is not None else self.config.output_path
        text = "".join(f"{line}\n" for line in self.get_output())
        path.write_text(text, encoding=self.config.encoding)
        logger.debug(f"Wrote {len(self._words)} words to {path}")
        return path

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write the symbol table sorted by address.

        Each line holds the label, its decimal address and its binary
        address.
        """
        path = Path(filepath)
        lines = ["; Symbol table"]
        if self._source_file:
            lines.append(f"; Source: {self._source_file}")
        lines.append("")
        for symbol in sorted(self._symbols, key=lambda s: (s.address, s.name)):
            lines.append(f"{symbol.name:<4}  {symbol.address:>5}  {address_text(symbol.address)}")
        path.write_text("\n".join(lines) + "\n", encoding=self.config.encoding)

    def write_listing(self, filepath: str | Path) -> None:
        """Write the listing produced by get_listing()."""
        Path(filepath).write_text(self.get_listing(), encoding=self.config.encoding)


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> list[str]:
    """
    Assemble source code and return the output lines.

    Args:
        source: Assembly source, one statement per line
        filename: Source name for error messages

    Returns:
        Output lines "<address> <word>" in program order
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> list[str]:
    """
    Assemble a source file and return the output lines.

    Args:
        filepath: Path to the assembly source

    Returns:
        Output lines "<address> <word>" in program order
    """
    return Assembler().assemble_file(filepath)
