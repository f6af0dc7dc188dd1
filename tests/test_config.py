# =============================================================================
# test_config.py - Configuration Tests
# =============================================================================

from pathlib import Path

from mano_asm.config import AssemblerConfig


class TestAssemblerConfig:
    """Test defaults and environment overrides."""

    def test_defaults(self):
        config = AssemblerConfig()
        assert config.output_path == Path("a.txt")
        assert config.encoding == "utf-8"
        assert config.allow_redefinition is False

    def test_from_env_without_variables(self, monkeypatch):
        for name in ("MANO_ASM_OUTPUT", "MANO_ASM_ENCODING", "MANO_ASM_ALLOW_REDEFINITION"):
            monkeypatch.delenv(name, raising=False)
        assert AssemblerConfig.from_env() == AssemblerConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MANO_ASM_OUTPUT", "build/out.txt")
        monkeypatch.setenv("MANO_ASM_ENCODING", "latin-1")
        monkeypatch.setenv("MANO_ASM_ALLOW_REDEFINITION", "yes")
        config = AssemblerConfig.from_env()
        assert config.output_path == Path("build/out.txt")
        assert config.encoding == "latin-1"
        assert config.allow_redefinition is True

    def test_redefinition_flag_false_values(self, monkeypatch):
        monkeypatch.setenv("MANO_ASM_ALLOW_REDEFINITION", "0")
        assert AssemblerConfig.from_env().allow_redefinition is False
