# tests/cli/test_cli.py
"""Tests for the ruletree CLI."""

from pathlib import Path

import yaml
from typer.testing import CliRunner

# Note: In Click 8.0+, mix_stderr is no longer a CliRunner parameter.
# Stderr output is combined with stdout in result.output.
runner = CliRunner()

ENCRYPT_YAML = """
tables:
  t_user:
    name: t_user
    columns:
      pwd:
        cipher:
          name: pwd_cipher
          encryptor_name: aes
encryptors:
  aes:
    type: AES
    props:
      aes-key-value: "123456abc"
"""


class TestCLIBasics:
    def test_version_flag(self) -> None:
        from ruletree.cli import app

        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "ruletree version" in result.stdout

    def test_help_flag(self) -> None:
        from ruletree.cli import app

        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "encode" in result.stdout
        assert "decode" in result.stdout
        assert "rules" in result.stdout

    def test_missing_settings_file(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        result = runner.invoke(app, ["--settings", str(tmp_path / "missing.yaml"), "rules"])
        assert result.exit_code == 1
        assert "Settings file not found" in result.output

    def test_invalid_settings_file(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        settings_file = tmp_path / "settings.yaml"
        settings_file.write_text("scalar_parse_policy: sloppy\n")

        result = runner.invoke(app, ["--settings", str(settings_file), "rules"])
        assert result.exit_code == 1
        assert "Settings errors:" in result.output


class TestRulesCommand:
    def test_lists_storage(self) -> None:
        from ruletree.cli import app

        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        lines = {line.split()[0]: line for line in result.stdout.splitlines()}
        assert lines["transaction"].endswith("global")
        assert lines["single"].endswith("singleton")
        assert lines["sharding"].endswith("fields (11)")
        assert lines["encrypt"].endswith("fields (2)")


class TestEncodeCommand:
    def test_encode(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        config_file = tmp_path / "encrypt.yaml"
        config_file.write_text(ENCRYPT_YAML)

        result = runner.invoke(app, ["encode", str(config_file), "--rule", "encrypt"])

        assert result.exit_code == 0, result.output
        tuples = yaml.safe_load(result.stdout)
        assert [each["path"] for each in tuples] == ["/rules/encrypt/tables/t_user", "/rules/encrypt/encryptors/aes"]
        assert yaml.safe_load(tuples[1]["value"]) == {"type": "AES", "props": {"aes-key-value": "123456abc"}}

    def test_empty_file_encodes_nothing(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        result = runner.invoke(app, ["encode", str(config_file), "--rule", "encrypt"])

        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout) == []

    def test_unknown_rule(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        config_file = tmp_path / "x.yaml"
        config_file.write_text("{}\n")

        result = runner.invoke(app, ["encode", str(config_file), "--rule", "nope"])

        assert result.exit_code == 1
        assert "Unknown rule type 'nope'" in result.output

    def test_invalid_configuration(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        config_file = tmp_path / "bad.yaml"
        config_file.write_text("encryptors:\n  aes:\n    props: {}\n")

        result = runner.invoke(app, ["encode", str(config_file), "--rule", "encrypt"])

        assert result.exit_code == 1
        assert "Configuration errors:" in result.output
        assert "encryptors.aes.type" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        result = runner.invoke(app, ["encode", str(tmp_path / "missing.yaml"), "--rule", "encrypt"])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_yaml_syntax_error(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        config_file = tmp_path / "broken.yaml"
        config_file.write_text("tables: [unclosed\n")

        result = runner.invoke(app, ["encode", str(config_file), "--rule", "encrypt"])

        assert result.exit_code == 1
        assert "YAML syntax error" in result.output


class TestDecodeCommand:
    def test_encode_then_decode(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        config_file = tmp_path / "encrypt.yaml"
        config_file.write_text(ENCRYPT_YAML)
        encoded = runner.invoke(app, ["encode", str(config_file), "--rule", "encrypt"])
        tuples_file = tmp_path / "tuples.yaml"
        tuples_file.write_text(encoded.stdout)

        result = runner.invoke(app, ["decode", str(tuples_file), "--rule", "encrypt"])

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.stdout) == yaml.safe_load(ENCRYPT_YAML)

    def test_not_configured(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        tuples_file = tmp_path / "tuples.yaml"
        tuples_file.write_text("- path: /rules/mask/tables/t_user\n  value: 'columns: {}'\n")

        result = runner.invoke(app, ["decode", str(tuples_file), "--rule", "encrypt"])

        assert result.exit_code == 0
        assert "Rule 'encrypt' is not configured." in result.stdout

    def test_global_rule(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        tuples_file = tmp_path / "tuples.yaml"
        tuples_file.write_text("- path: /rules/transaction/versions/0\n  value: 'default_type: XA'\n")

        result = runner.invoke(app, ["decode", str(tuples_file), "--rule", "transaction"])

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.stdout) == {"default_type": "XA", "props": {}}

    def test_malformed_value(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        tuples_file = tmp_path / "tuples.yaml"
        tuples_file.write_text("- path: /rules/encrypt/encryptors/aes\n  value: '- not a mapping'\n")

        result = runner.invoke(app, ["decode", str(tuples_file), "--rule", "encrypt"])

        assert result.exit_code == 1
        assert "/rules/encrypt/encryptors/aes" in result.output

    def test_malformed_tuples_file(self, tmp_path: Path) -> None:
        from ruletree.cli import app

        tuples_file = tmp_path / "tuples.yaml"
        tuples_file.write_text("path: not-a-list\n")

        result = runner.invoke(app, ["decode", str(tuples_file), "--rule", "encrypt"])

        assert result.exit_code == 1
        assert "Error:" in result.output
