"""Integration tests for documents and keys."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from config_keys import ConfigFile
from config_keys import ConfigFormat
from config_keys import ConfigKey
from config_keys import open_config
from config_keys import reset_default_config
from config_keys import set_default_config
from config_keys import transformers


class TestConfigIntegration:
    """Integration tests for realistic configuration scenarios."""

    @pytest.fixture
    def tmpdir_path(self):
        """Create temporary directory for testing."""
        with TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    @pytest.fixture(autouse=True)
    def clean_registry(self):
        """Reset the module-level registry around each test."""
        reset_default_config()
        yield
        reset_default_config()

    def test_fresh_yaml_document_workflow(self, tmpdir_path):
        """Test create, default, set and reload on a new YAML file."""
        path = tmpdir_path / "cfg.yaml"
        config = open_config(path)
        assert path.exists()

        level = ConfigKey.of_single("level", default=42)
        assert level.get(config) == 42

        assert level.set(7, config)
        assert level.get(config) == 7

        config.reload()
        assert level.get(config) == 7

    def test_template_merge_preserves_user_values(self, tmpdir_path):
        """Test merging a JSON template into an existing file."""
        template = tmpdir_path / "defaults.json"
        template.write_text(json.dumps({"version": "1.0", "debug": False}))
        path = tmpdir_path / "cfg.json"
        path.write_text(json.dumps({"version": "2.0"}))

        config = open_config(path, template=template, merge=True)

        assert ConfigKey.of_single("version").get(config) == "2.0"
        assert ConfigKey.of_single("debug", default=True).get(config) is False
        assert json.loads(path.read_text()) == {"version": "2.0", "debug": False}

    @pytest.mark.parametrize("fmt", list(ConfigFormat))
    def test_every_format_round_trips_keys(self, tmpdir_path, fmt):
        """Test keys behave the same whatever the file format."""
        config = ConfigFile.load(tmpdir_path / "cfg.data", fmt)

        ConfigKey.of_path("server", "host").set("localhost", config)
        ConfigKey.of_path("server", "port").set(8080, config)
        ConfigKey.of_path("server", "debug").set(True, config)
        ConfigKey.of_path("server", "ratio").set(0.25, config)
        ConfigKey.of_single("ids").set([1, 2, 3, 4, 5], config)
        config.reload()

        assert ConfigKey.of_path("server", "host").get(config) == "localhost"
        assert ConfigKey.of_path("server", "port", default=0).get(config) == 8080
        assert ConfigKey.of_path("server", "debug", default=False).get(config) is True
        assert ConfigKey.of_path("server", "ratio", default=0.0).get(config) == 0.25
        assert ConfigKey.of_single("ids", transformer=transformers.INTEGER_LIST).get(config) == [1, 2, 3, 4, 5]

    def test_application_wide_default_document(self, tmpdir_path):
        """Test keys declared once and used through the default document."""
        template = tmpdir_path / "defaults.conf"
        template.write_text('server { port = 8080 }\nfeatures = ["search", "export"]\n')

        config = ConfigFile.load_hocon(tmpdir_path / "app" / "app.conf", template=template)
        set_default_config(config)

        port = ConfigKey.of_dotted("server.port", default=80)
        features = ConfigKey.of_single("features", default=set(), transformer=transformers.STRING_SET)

        assert port.get() == 8080
        assert features.get() == {"search", "export"}

        port.set(9090)
        assert "9090" in config.path.read_text()

    def test_one_key_many_documents(self, tmpdir_path):
        """Test a single key reads independently from several documents."""
        first = open_config(tmpdir_path / "a.yaml")
        second = open_config(tmpdir_path / "b.json")
        key = ConfigKey.of_path("owner", "name", default="nobody")

        key.set("alice", first)
        assert key.get(first) == "alice"
        assert key.get(second) == "nobody"

    def test_upgrade_with_new_template_defaults(self, tmpdir_path):
        """Test new template keys reach an existing user file on upgrade."""
        template = tmpdir_path / "defaults.yaml"
        template.write_text("db:\n  host: localhost\n")
        path = tmpdir_path / "cfg.yaml"

        config = open_config(path, template=template)
        ConfigKey.of_path("db", "host").set("db.internal", config)

        template.write_text("db:\n  host: localhost\n  port: 5432\nretries: 3\n")
        config = open_config(path, template=template, merge=True)

        assert ConfigKey.of_path("db", "host").get(config) == "db.internal"
        assert ConfigKey.of_path("db", "port", default=0).get(config) == 5432
        assert ConfigKey.of_single("retries", default=0).get(config) == 3
