"""
Assembler Configuration
=======================

Run settings for the assembler and its command-line tool. Configuration
can come from:
- Default values (defined here)
- Environment variables (AssemblerConfig.from_env)
- Command-line flags, which override both
"""

from dataclasses import dataclass, field
from pathlib import Path
import os


DEFAULT_OUTPUT = "a.txt"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        output_path: Where the machine-code listing is written (default: a.txt)
        encoding: Text encoding for source and output files (default: utf-8)
        allow_redefinition: Let a repeated label replace the earlier
            definition instead of failing (default: False)
    """

    output_path: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT))
    encoding: str = "utf-8"
    allow_redefinition: bool = False

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            MANO_ASM_OUTPUT: Output file path
            MANO_ASM_ENCODING: Source/output text encoding
            MANO_ASM_ALLOW_REDEFINITION: "1"/"true"/"yes"/"on" to allow
                repeated labels

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if output := os.environ.get("MANO_ASM_OUTPUT"):
            config.output_path = Path(output)

        if encoding := os.environ.get("MANO_ASM_ENCODING"):
            config.encoding = encoding

        if redefinition := os.environ.get("MANO_ASM_ALLOW_REDEFINITION"):
            config.allow_redefinition = redefinition.strip().lower() in _TRUE_VALUES

        return config
