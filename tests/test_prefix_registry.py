"""Tests for the YAML-backed prefix registry."""

import pytest
import yaml

from puidv7.core.config import settings
from puidv7.core.errors import DuplicateModelNamesError, PrefixRegistryError
from puidv7.core.models import PrefixAssignments
from puidv7.core.prefix_registry import PrefixRegistry

from tests.conftest import write_registry


VALID_REGISTRY_YAML = """
version: "2"
prefixes:
  acc: account
  inv: invoice
"""


class TestLoadFromYaml:
    """Test YAML parsing into PrefixAssignments."""

    def test_valid_yaml_loads(self, registry):
        assignments = registry.load_from_yaml(VALID_REGISTRY_YAML)
        assert assignments.version == "2"
        assert assignments.prefixes == {"acc": "account", "inv": "invoice"}

    def test_empty_yaml(self, registry):
        assignments = registry.load_from_yaml("")
        assert assignments.prefixes == {}
        assert assignments.version == "1"

    def test_quoted_yaml_keywords_stay_strings(self, registry):
        assignments = registry.load_from_yaml("prefixes:\n  'off': office\n  'yes': yesterday\n")
        assert assignments.prefixes == {"off": "office", "yes": "yesterday"}

    def test_unquoted_yaml_keyword_rejected(self, registry):
        with pytest.raises(PrefixRegistryError):
            registry.load_from_yaml("prefixes:\n  off: office\n")

    def test_model_names(self, registry):
        assignments = registry.load_from_yaml(VALID_REGISTRY_YAML)
        assert assignments.model_names() == ["account", "invoice"]

    def test_invalid_yaml_raises(self, registry):
        with pytest.raises(PrefixRegistryError, match="Invalid prefix registry YAML"):
            registry.load_from_yaml("not: [valid: yaml: {{")

    def test_non_mapping_raises(self, registry):
        with pytest.raises(PrefixRegistryError, match="must be a mapping"):
            registry.load_from_yaml("- just\n- a\n- list")

    def test_prefixes_not_mapping(self, registry):
        with pytest.raises(PrefixRegistryError):
            registry.load_from_yaml("prefixes:\n  - acc\n")

    def test_invalid_prefix(self, registry):
        with pytest.raises(PrefixRegistryError) as exc:
            registry.load_from_yaml("prefixes:\n  acct: account\n")
        assert any("acct" in e for e in exc.value.errors)

    def test_invalid_model(self, registry):
        with pytest.raises(PrefixRegistryError) as exc:
            registry.load_from_yaml("prefixes:\n  acc: Account\n")
        assert any("Account" in e for e in exc.value.errors)

    def test_short_model(self, registry):
        with pytest.raises(PrefixRegistryError) as exc:
            registry.load_from_yaml("prefixes:\n  abx: ab\n")
        assert any("shorter than 3" in e for e in exc.value.errors)

    def test_model_assigned_twice(self, registry):
        with pytest.raises(PrefixRegistryError) as exc:
            registry.load_from_yaml("prefixes:\n  acc: account\n  act: account\n")
        assert exc.value.errors == ["Model 'account' assigned to both 'acc' and 'act'"]

    def test_all_errors_reported(self, registry):
        with pytest.raises(PrefixRegistryError) as exc:
            registry.load_from_yaml("prefixes:\n  acct: account\n  inv: Invoice\n")
        assert len(exc.value.errors) == 2


class TestLoadAndSave:
    def test_missing_file(self, registry):
        assert not registry.exists()
        with pytest.raises(FileNotFoundError):
            registry.load()

    def test_load_file(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account", "ssn": "session"})
        assignments = registry.load()
        assert assignments.prefixes == {"acc": "account", "ssn": "session"}

    def test_get_caches(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account"})
        first = registry.get()
        registry_path.unlink()
        assert registry.get() is first

    def test_save_round_trip(self, registry, registry_path):
        assignments = PrefixAssignments(prefixes={"ssn": "session", "acc": "account"})
        registry.save(assignments)

        raw = yaml.safe_load(registry_path.read_text())
        assert raw == {"version": "1", "prefixes": {"ssn": "session", "acc": "account"}}
        # insertion order survives the file
        assert list(PrefixRegistry(str(registry_path)).load().prefixes) == ["ssn", "acc"]

    def test_save_round_trip_yaml_keywords(self, registry, registry_path):
        registry.save(PrefixAssignments(prefixes={"off": "office", "yes": "yesterday"}))
        reloaded = PrefixRegistry(str(registry_path)).load()
        assert reloaded.prefixes == {"off": "office", "yes": "yesterday"}

    def test_write_registry_helper_quotes_keys(self, registry, registry_path):
        write_registry(registry_path, {"off": "office"})
        assert registry.load().prefixes == {"off": "office"}

    def test_save_creates_parent_dirs(self, tmp_path):
        registry = PrefixRegistry(str(tmp_path / "nested" / "dir" / "prefixes.yaml"))
        registry.save(PrefixAssignments(prefixes={"tsk": "task"}))
        assert registry.exists()

    def test_save_rejects_invalid(self, registry, registry_path):
        with pytest.raises(PrefixRegistryError):
            registry.save(PrefixAssignments(prefixes={"TSK": "task"}))
        assert not registry_path.exists()

    def test_relative_path_resolves_to_project_root(self):
        registry = PrefixRegistry("some/prefixes.yaml")
        assert registry.path == settings.project_root / "some" / "prefixes.yaml"

    def test_default_path_from_settings(self):
        registry = PrefixRegistry()
        assert registry.path == settings.project_root / settings.prefixes_file


class TestAssign:
    def test_assign_without_file(self, registry):
        assignments = registry.assign(["account", "invoice", "invite", "session"])
        assert assignments.prefixes == {
            "acc": "account",
            "inv": "invoice",
            "ivt": "invite",
            "ssn": "session",
        }

    def test_existing_prefixes_stay_stable(self, registry, registry_path):
        write_registry(registry_path, {"inv": "invite"})
        assignments = registry.assign(["invoice", "invite"])
        # a fresh derivation would give invoice "inv"
        assert assignments.prefixes == {"inv": "invite", "ivc": "invoice"}

    def test_assign_does_not_write(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account"})
        registry.assign(["session"])
        assert registry.load().prefixes == {"acc": "account"}

    def test_assign_then_save(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account"}, version="3")
        registry.save(registry.assign(["session"]))
        reloaded = PrefixRegistry(str(registry_path)).load()
        assert reloaded.version == "3"
        assert reloaded.prefixes == {"acc": "account", "ssn": "session"}

    def test_known_models_only(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account"})
        assert registry.assign(["account"]).prefixes == {"acc": "account"}

    def test_duplicate_input(self, registry):
        with pytest.raises(DuplicateModelNamesError):
            registry.assign(["user", "user"])


class TestLookups:
    def test_prefix_for(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account", "ssn": "session"})
        assert registry.prefix_for("session") == "ssn"

    def test_model_for(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account"})
        assert registry.model_for("acc") == "account"

    def test_unknown_model(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account"})
        with pytest.raises(KeyError):
            registry.prefix_for("invoice")

    def test_unknown_prefix(self, registry, registry_path):
        write_registry(registry_path, {"acc": "account"})
        with pytest.raises(KeyError):
            registry.model_for("inv")
