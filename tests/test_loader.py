# ============================================================================
# CHECK DEFINITIONS LOADER TESTS
# ============================================================================
# STATUS: Tests - YAML check definitions
# PURPOSE: Verify parsing, validation and handler construction
# CREATED: 08 MAR 2026
# ============================================================================
"""
Check Definitions Loader Tests

Run with:
    pytest tests/test_loader.py -v
"""

import textwrap

import pytest

from core.config import HealthSettings
from health.checks import DirectoryCheck, PingCheck
from health.core import CheckConfigurationError
from health.loader import (
    CheckDefinition,
    apply_definitions,
    build_handler,
    load_check_definitions,
)
from health.handler import Handler
from health.registry import CheckNotFoundError


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def checks_file(tmp_path):
    """Write YAML text to a checks file and return its path."""
    def write(text: str):
        path = tmp_path / "checks.yaml"
        path.write_text(textwrap.dedent(text))
        return path

    return write


# ============================================================================
# PARSING
# ============================================================================

class TestLoadCheckDefinitions:
    """Tests for load_check_definitions."""

    def test_parses_definitions_in_order(self, checks_file, tmp_path):
        path = checks_file(f"""
            checks:
              - name: uploads
                kind: directory
                concurrent: false
                options:
                  path: {tmp_path}
                  permissions: [read, write]
              - name: ping
                timeout: 2.5
                options:
                  host: cache.internal
                  port: 11211
        """)

        definitions = load_check_definitions(path)

        assert [d.name for d in definitions] == ["uploads", "ping"]
        assert definitions[0].kind == "directory"
        assert definitions[0].concurrent is False
        assert definitions[0].options["permissions"] == ["read", "write"]
        assert definitions[1].kind is None
        assert definitions[1].timeout == 2.5

    def test_empty_file(self, checks_file):
        assert load_check_definitions(checks_file("")) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CheckConfigurationError, match="Cannot read"):
            load_check_definitions(tmp_path / "absent.yaml")

    def test_malformed_yaml(self, checks_file):
        with pytest.raises(CheckConfigurationError):
            load_check_definitions(checks_file("checks: [name: {"))

    def test_unknown_key_rejected(self, checks_file):
        path = checks_file("""
            checks:
              - name: db
                retries: 3
        """)
        with pytest.raises(CheckConfigurationError, match="Invalid checks file"):
            load_check_definitions(path)

    def test_non_positive_timeout_rejected(self, checks_file):
        path = checks_file("""
            checks:
              - name: db
                timeout: 0
        """)
        with pytest.raises(CheckConfigurationError):
            load_check_definitions(path)


class TestCheckDefinition:
    """Tests for CheckDefinition."""

    def test_filter_options_defaults(self):
        assert CheckDefinition(name="db").filter_options() == {"concurrent": True}

    def test_filter_options_with_timeout(self):
        definition = CheckDefinition(name="db", concurrent=False, timeout=3)
        assert definition.filter_options() == {"concurrent": False, "timeout": 3.0}


# ============================================================================
# HANDLER CONSTRUCTION
# ============================================================================

class TestApplyDefinitions:
    """Tests for registering definitions on a handler."""

    def test_kind_defaults_to_name(self):
        handler = Handler(hostname="")
        apply_definitions(handler, [
            CheckDefinition(name="ping", timeout=1, options={"host": "db", "port": 5432}),
        ])

        (check_filter,) = handler.filters
        assert check_filter.name == "ping"
        assert isinstance(check_filter.probe, PingCheck)
        assert check_filter.probe.port == 5432
        assert check_filter.timeout == 1.0

    def test_explicit_kind_keeps_display_name(self, tmp_path):
        handler = Handler(hostname="")
        apply_definitions(handler, [
            CheckDefinition(
                name="uploads",
                kind="directory",
                concurrent=False,
                options={"path": str(tmp_path)},
            ),
        ])

        (check_filter,) = handler.filters
        assert check_filter.name == "uploads"
        assert check_filter.concurrent is False
        assert isinstance(check_filter.probe, DirectoryCheck)

    def test_unknown_kind(self):
        with pytest.raises(CheckNotFoundError, match="RabbitmqCheck"):
            apply_definitions(Handler(hostname=""), [CheckDefinition(name="mq", kind="rabbitmq")])


class TestBuildHandler:
    """Tests for build_handler."""

    def test_uses_settings(self):
        settings = HealthSettings(
            route_path="/status",
            hostname="web-1",
            check_timeout=7.0,
        )
        handler = build_handler(settings, definitions=[
            CheckDefinition(name="ping", options={"host": "db", "port": 5432}),
        ])

        assert handler.route_path == "/status"
        assert handler.hostname == "web-1"
        assert handler.filters[0].timeout == 7.0

    def test_reads_checks_file(self, checks_file, tmp_path):
        path = checks_file(f"""
            checks:
              - name: data
                kind: directory
                concurrent: false
                options:
                  path: {tmp_path}
        """)
        handler = build_handler(HealthSettings(hostname="", checks_file=str(path)))

        status_code, lines = handler.dispatch(handler.route_path)
        assert status_code == 200
        assert lines[-1].startswith(f"OK:   data - directory {tmp_path} exists")

    def test_no_checks_file(self):
        handler = build_handler(HealthSettings(hostname=""))
        assert handler.filters == ()
