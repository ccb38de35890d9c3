"""Tests for the core module registry."""

import pytest

from resolution.core_modules import CORE_MODULES, CoreModuleRegistry


class TestCoreModuleRegistry:
    """Test core module detection and canonical ids."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = CoreModuleRegistry()

    @pytest.mark.parametrize("name", sorted(CORE_MODULES))
    def test_every_core_name_gets_prefix(self, name):
        assert self.registry.canonical(name) == "node:" + name

    def test_prefixed_id_is_idempotent(self):
        assert self.registry.canonical("node:path") == "node:path"
        assert self.registry.canonical(self.registry.canonical("fs")) == "node:fs"

    def test_subpath_core_modules(self):
        assert self.registry.canonical("fs/promises") == "node:fs/promises"

    def test_prefix_only_names(self):
        assert self.registry.canonical("test") is None
        assert self.registry.canonical("node:test") == "node:test"
        assert "test" not in self.registry
        assert "node:test" in self.registry

    def test_non_core(self):
        assert self.registry.canonical("lodash") is None
        assert self.registry.canonical("./path") is None
        assert "lodash" not in self.registry

    def test_bare_prefix_is_not_core(self):
        assert self.registry.canonical("node:") is None

    def test_extra_names(self):
        registry = CoreModuleRegistry(extra=["electron"])
        assert registry.canonical("electron") == "node:electron"
        assert "electron" in registry
