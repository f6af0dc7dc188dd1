"""
manoasm - Mano Basic Computer Assembler Command-Line Interface
==============================================================

Usage Examples
--------------
Basic assembly (writes a.txt):
    $ manoasm prog.asm

With output file:
    $ manoasm prog.asm -o prog.txt

Generate symbol table and listing too:
    $ manoasm prog.asm -o prog.txt -s prog.sym -l prog.lst

Verbose mode:
    $ manoasm -v prog.asm
"""

import logging
from pathlib import Path
from typing import Optional

import click

from mano_asm import __version__
from mano_asm.assembler import Assembler
from mano_asm.cli.errors import handle_cli_exception
from mano_asm.config import AssemblerConfig


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: a.txt, or $MANO_ASM_OUTPUT)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol table file",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file (words next to their source lines)",
)
@click.option(
    "--allow-redefinition",
    is_flag=True,
    help="Let a repeated label replace its earlier definition instead of failing",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="manoasm")
def main(
    input_file: Path,
    output: Optional[Path],
    symbols: Optional[Path],
    listing: Optional[Path],
    allow_redefinition: bool,
    verbose: bool,
) -> None:
    """
    Assemble a Mano Basic Computer program.

    INPUT_FILE is the assembly source file to assemble. Each emitted word
    is written as "<address> <word>" in binary, one per line.

    \b
    Examples:
        manoasm prog.asm              # Outputs a.txt
        manoasm prog.asm -o out.txt   # Specify output file
        manoasm prog.asm -s prog.sym  # Also write symbol table
    """
    setup_logging(verbose)

    config = AssemblerConfig.from_env()
    if output is not None:
        config.output_path = output
    if allow_redefinition:
        config.allow_redefinition = True

    asm = Assembler(config=config, verbose=verbose)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        asm.assemble_file(input_file)
        written = asm.write_output()
        if verbose:
            click.echo(f"Wrote {len(asm.get_words())} words to {written}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if verbose:
            click.echo(f"Defined {len(asm.get_symbols())} symbols")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
