"""
Mano Assembler Command-Line Interface
=====================================

- **manoasm**: Mano Basic Computer assembler

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["manoasm"]
