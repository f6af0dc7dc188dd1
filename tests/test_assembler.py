# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end tests for the two-pass assembler, from source text to output
# lines and files.
#
# Test coverage includes:
#   - Complete programs with labels, ORG, data words and indirect operands
#   - Address sequencing and END handling
#   - Idempotence and run isolation
#   - Error propagation
#   - Output, symbol and listing files
# =============================================================================

import pytest

from mano_asm import AssemblerConfig
from mano_asm.assembler import Assembler, assemble, assemble_file
from mano_asm.errors import (
    AssemblerError,
    DuplicateSymbolError,
    MalformedOperandError,
    MissingSymbolError,
    UnrecognizedMnemonicError,
)


# Adds two numbers and stores the sum (Mano, Table 6-8 style).
ADD_PROGRAM = """\
        ORG 100     / origin of program is location 100
        LDA AAA     / load operand from location AAA
        ADD BBB     / add operand from location BBB
        STA CCC     / store sum in location CCC
        HLT         / halt computer
AAA,    DEC 83      / decimal operand
BBB,    DEC -23     / decimal operand
CCC,    DEC 0       / sum stored here
        END         / end of symbolic program
"""


# =============================================================================
# Full Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test complete programs."""

    def test_add_program(self):
        assert assemble(ADD_PROGRAM) == [
            "1100100 0010000001101000",   # 100: LDA AAA (104)
            "1100101 0001000001101001",   # 101: ADD BBB (105)
            "1100110 0011000001101010",   # 102: STA CCC (106)
            "1100111 0111000000000001",   # 103: HLT
            "1101000 0000000001010011",   # 104: DEC 83
            "1101001 1111111111101001",   # 105: DEC -23
            "1101010 0000000000000000",   # 106: DEC 0
        ]

    def test_add_program_symbols(self):
        asm = Assembler()
        asm.assemble_string(ADD_PROGRAM)
        assert asm.get_symbols() == {"AAA": 104, "BBB": 105, "CCC": 106}

    def test_pointer_loop(self):
        source = """\
     ORG 0
LOP, LDA PTR I
     ISZ PTR
     BUN LOP
PTR, HEX 10
     END
"""
        assert assemble(source) == [
            "0 1010000000000011",
            "1 0110000000000011",
            "10 0100000000000000",
            "11 0000000000010000",
        ]

    def test_forward_reference(self):
        """Labels defined after use resolve in the second pass."""
        assert assemble("BUN FIN\nCLA\nFIN, HLT\nEND") == [
            "0 0100000000000010",
            "1 0111100000000000",
            "10 0111000000000001",
        ]

    def test_minimal_program(self):
        assert assemble("CLA") == ["0 0111100000000000"]

    def test_empty_program(self):
        assert assemble("") == []


# =============================================================================
# Address Sequencing Tests
# =============================================================================

class TestAddressing:
    """Test the location counter across a whole program."""

    def test_addresses_count_up_without_org(self):
        source = "CLA\nCLE\nCMA\nCME\nINC\nEND"
        addresses = [line.split()[0] for line in assemble(source)]
        assert addresses == ["0", "1", "10", "11", "100"]

    def test_cla_at_address_three(self):
        assert assemble("CLE\nCLE\nCLE\nCLA\nEND")[3] == "11 0111100000000000"

    def test_org_places_next_instruction(self):
        source = "CLA\nCLA\nCLA\nORG 5\nHLT\nEND"
        assert assemble(source)[-1] == "101 0111000000000001"

    def test_org_and_end_emit_nothing(self):
        assert len(assemble("ORG 20\nCLA\nORG 40\nCLE\nEND")) == 2

    def test_lines_after_end_never_emitted(self):
        """Anything after END is skipped, even invalid statements."""
        source = "CLA\nEND\nHLT\nBAD STUFF\nLDA NOWHERE"
        assert assemble(source) == ["0 0111100000000000"]

    def test_lines_after_labelled_end_never_emitted(self):
        """A labelled END halts both passes, even before invalid lines."""
        assert assemble("CLA\nFIN, END\nAAA, CLA\nAAA, CLA") == ["0 0111100000000000"]
        assert assemble("CLA\nFIN, END\nORG TEN\nXYZ") == ["0 0111100000000000"]

    def test_blank_lines_and_comments_ignored(self):
        source = "/ program header\n\nCLA\n\n   / note\nHLT\nEND\n"
        assert assemble(source) == ["0 0111100000000000", "1 0111000000000001"]

    def test_label_resolves_to_first_pass_address(self):
        source = "ORG 7\nCLA\nLOP, CLE\nBUN LOP I\nEND"
        output = assemble(source)
        assert output[1] == "1000 0111010000000000"
        assert output[2] == "1001 1100000000001000"


# =============================================================================
# Run Isolation Tests
# =============================================================================

class TestRunIsolation:
    """Test that runs are deterministic and independent."""

    def test_idempotent(self):
        asm = Assembler()
        first = asm.assemble_string(ADD_PROGRAM)
        second = asm.assemble_string(ADD_PROGRAM)
        assert first == second

    def test_state_reset_between_runs(self):
        asm = Assembler()
        asm.assemble_string("AAA, CLA\nEND")
        asm.assemble_string("BBB, HLT\nEND")
        assert asm.get_symbols() == {"BBB": 0}
        assert asm.get_output() == ["0 0111000000000001"]

    def test_failed_run_keeps_no_output(self):
        asm = Assembler()
        asm.assemble_string("CLA\nEND")
        with pytest.raises(MissingSymbolError):
            asm.assemble_string("LDA XYZ\nEND")
        assert asm.get_output() == []

    def test_accepts_any_iterable(self):
        asm = Assembler()
        assert asm.assemble(iter(["CLA", "END"])) == ["0 0111100000000000"]


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrorHandling:
    """Test that every failure aborts the run."""

    def test_unrecognized_mnemonic(self):
        with pytest.raises(UnrecognizedMnemonicError) as exc_info:
            assemble("CLA\nNOP\nEND", filename="prog.asm")
        assert str(exc_info.value).startswith("prog.asm:2:1: error:")

    def test_missing_symbol(self):
        with pytest.raises(MissingSymbolError):
            assemble("LDA VAL\nEND")

    def test_malformed_dec(self):
        with pytest.raises(MalformedOperandError):
            assemble("DEC ABC\nEND")

    def test_duplicate_label(self):
        with pytest.raises(DuplicateSymbolError):
            assemble("AAA, CLA\nAAA, CLE\nEND")

    def test_duplicate_label_allowed_by_config(self):
        asm = Assembler(config=AssemblerConfig(allow_redefinition=True))
        output = asm.assemble_string("AAA, CLA\nAAA, CLE\nBUN AAA\nEND")
        assert output[2] == "10 0100000000000001"

    def test_errors_share_base_class(self):
        with pytest.raises(AssemblerError):
            assemble("XYZ\nEND")


# =============================================================================
# File I/O Tests
# =============================================================================

class TestFiles:
    """Test reading sources and writing output files."""

    def test_assemble_file(self, tmp_path):
        source = tmp_path / "prog.asm"
        source.write_text(ADD_PROGRAM)
        assert assemble_file(source) == assemble(ADD_PROGRAM)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            assemble_file(tmp_path / "missing.asm")

    def test_error_names_file(self, tmp_path):
        source = tmp_path / "bad.asm"
        source.write_text("CLA\nFOO\n")
        with pytest.raises(UnrecognizedMnemonicError) as exc_info:
            assemble_file(source)
        assert str(source) in str(exc_info.value)

    def test_write_output(self, tmp_path):
        out = tmp_path / "a.txt"
        asm = Assembler()
        asm.assemble_string("CLA\nHLT\nEND")
        assert asm.write_output(out) == out
        assert out.read_text() == "0 0111100000000000\n1 0111000000000001\n"

    def test_write_output_default_path(self, tmp_path):
        out = tmp_path / "default.txt"
        asm = Assembler(config=AssemblerConfig(output_path=out))
        asm.assemble_string("CLA\nEND")
        asm.write_output()
        assert out.read_text() == "0 0111100000000000\n"

    def test_write_symbols(self, tmp_path):
        sym = tmp_path / "prog.sym"
        asm = Assembler()
        asm.assemble_string("ORG 4\nVAL, DEC 1\nLOP, BUN LOP\nEND")
        asm.write_symbols(sym)
        lines = sym.read_text().splitlines()
        assert lines[0] == "; Symbol table"
        assert lines[-2].split() == ["VAL", "4", "100"]
        assert lines[-1].split() == ["LOP", "5", "101"]

    def test_listing(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("CLA / clear\nORG 9\nOUT\nEND")
        listing = asm.get_listing().splitlines()
        assert len(listing) == 2
        assert listing[0].startswith("0 0111100000000000")
        assert listing[0].endswith("CLA / clear")
        assert listing[1].startswith("1001 1111010000000000")

        path = tmp_path / "prog.lst"
        asm.write_listing(path)
        assert path.read_text() == asm.get_listing()

    def test_empty_listing(self):
        asm = Assembler()
        asm.assemble_string("END")
        assert asm.get_listing() == ""
