import dataclasses

import pytest

from definition_argparser import ArgDefinition, DefinitionTable


class TestArgDefinition:
    """Test suite for ArgDefinition construction."""

    def test_defaults(self):
        definition = ArgDefinition("--flag")
        assert definition.param_count == 0
        assert definition.aliases == ()
        assert definition.default is None
        assert definition.info is None

    def test_aliases_normalized_to_tuple(self):
        assert ArgDefinition("--list", 1, aliases=["-l", "-L"]).aliases == ("-l", "-L")
        assert ArgDefinition("--list", 1, aliases="-l").aliases == ("-l",)

    def test_tokens_lists_name_then_aliases(self):
        definition = ArgDefinition("--help", 0, aliases=("-h", "-?"))
        assert definition.tokens == ("--help", "-h", "-?")

    def test_negative_param_count_raises(self):
        with pytest.raises(ValueError) as exc:
            ArgDefinition("--bad", -1)
        assert "non-negative" in str(exc.value)

    @pytest.mark.parametrize("name", ["", None])
    def test_empty_name_raises(self, name):
        with pytest.raises(ValueError):
            ArgDefinition(name)

    def test_non_int_param_count_raises(self):
        with pytest.raises(ValueError):
            ArgDefinition("--bad", "2")
        with pytest.raises(ValueError):
            ArgDefinition("--bad", True)

    def test_is_immutable(self):
        definition = ArgDefinition("--int", 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            definition.param_count = 2


class TestDefinitionTable:
    """Test suite for DefinitionTable lookups."""

    def test_lookup_by_name_and_alias(self):
        help_def = ArgDefinition("--help", 0, aliases=("-h", "-?"))
        table = DefinitionTable([help_def])
        assert table.lookup("--help") is help_def
        assert table.lookup("-h") is help_def
        assert table.lookup("-?") is help_def
        assert table.lookup("--other") is None
        assert table.lookup(None) is None

    def test_case_sensitive_by_default(self):
        table = DefinitionTable([ArgDefinition("--int", 1, default="5")])
        assert table.lookup("--INT") is None
        assert table.get_default("--INT") is None
        assert "--INT" not in table

    def test_ignore_case_applies_to_lookup_and_defaults(self):
        definition = ArgDefinition("--int", 1, aliases=("-i",), default="5")
        table = DefinitionTable([definition], ignore_case=True)
        assert table.lookup("--INT") is definition
        assert table.lookup("-I") is definition
        assert table.get_default("--Int") == "5"
        assert "--iNt" in table

    def test_last_registration_wins(self):
        first = ArgDefinition("--first", 0, aliases=("-x",))
        second = ArgDefinition("--second", 1, aliases=("-x",))
        table = DefinitionTable([first, second])
        assert table.lookup("-x") is second
        assert table.lookup("--first") is first

    def test_duplicate_name_overwrites_silently(self):
        first = ArgDefinition("--dup", 0, default="a")
        second = ArgDefinition("--dup", 2, default="b")
        table = DefinitionTable([first, second])
        assert table.lookup("--dup") is second
        assert table.get_default("--dup") == "b"
        assert len(table) == 2

    def test_defaults_only_for_declared(self):
        table = DefinitionTable(
            [
                ArgDefinition("--int", 1, default="12345"),
                ArgDefinition("--string", 1),
            ]
        )
        assert table.defaults == {"--int": "12345"}
        assert table.has_defaults is True
        assert table.get_default("--string") is None

    def test_has_defaults_false_without_defaults(self):
        table = DefinitionTable([ArgDefinition("--flag")])
        assert table.has_defaults is False
        assert table.defaults == {}

    def test_iteration_preserves_order(self):
        defs = [ArgDefinition("--b"), ArgDefinition("--a"), ArgDefinition("--c")]
        assert [d.name for d in DefinitionTable(defs)] == ["--b", "--a", "--c"]

    def test_rejects_non_definitions(self):
        with pytest.raises(TypeError):
            DefinitionTable([("--flag", 0)])
