"""Tests unitaires pour LinuxConfigStore."""

import json
import os
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from linux_kvconf.config import StoreSettings
from linux_kvconf.errors import (
    KeyNotFoundError,
    MissingArgumentsError,
    ResourceNotFoundError,
    WriteFailureError,
)
from linux_kvconf.kvconf import ConfigStore, LinuxConfigStore, SetOutcome
from linux_kvconf.logging import Logger, SecurityLogger


# Fixtures


@pytest.fixture
def base_dir(tmp_path):
    """Crée l'arborescence <base>/etc."""
    (tmp_path / "etc").mkdir()
    return tmp_path


@pytest.fixture
def logger():
    """Logger simulé."""
    return MagicMock(spec=Logger)


@pytest.fixture
def store(base_dir, logger):
    """Magasin pointant sur le répertoire temporaire."""
    return LinuxConfigStore(StoreSettings(base_dir=base_dir), logger=logger)


def write_conf(base_dir: Path, name: str, content: str) -> Path:
    """Écrit <base>/etc/<name>.conf et retourne son chemin."""
    path = base_dir / "etc" / f"{name}.conf"
    path.write_text(content, encoding="utf-8", newline="")
    return path


def read(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


# Lecture


class TestGet:
    """Tests pour get_by_name / get_by_path / lookup."""

    def test_implements_interface(self, store):
        assert isinstance(store, ConfigStore)

    def test_resolve(self, store, base_dir):
        assert store.resolve("api") == base_dir / "etc" / "api.conf"

    def test_scenario_a(self, store, base_dir):
        """level = 1 -> "1"."""
        write_conf(base_dir, "logger", "level = 1\n")
        assert store.get_by_name("logger", "level") == "1"

    def test_value_trimmed_and_opaque(self, store, base_dir):
        write_conf(base_dir, "api", "host =   https://example.com/?a=b  \n")
        assert store.get_by_name("api", "host") == "https://example.com/?a=b"

    def test_first_active_match(self, store, base_dir):
        write_conf(base_dir, "api", "# host = old\nhost = a\nhost = b\n")
        assert store.get_by_name("api", "host") == "a"

    def test_indented_entry(self, store, base_dir):
        write_conf(base_dir, "api", "[server]\n    port = 8080\n")
        assert store.get_by_name("api", "port") == "8080"

    def test_empty_value_is_found(self, store, base_dir):
        """Une valeur vide configurée se distingue d'une clé absente."""
        write_conf(base_dir, "api", "token =\n")
        assert store.get_by_name("api", "token") == ""

    def test_key_not_found(self, store, base_dir):
        write_conf(base_dir, "api", "host = x\n")
        with pytest.raises(KeyNotFoundError) as exc:
            store.get_by_name("api", "token")
        assert exc.value.key == "token"
        assert exc.value.exit_code == 1

    def test_commented_key_not_found(self, store, base_dir):
        write_conf(base_dir, "api", "# token = secret\n")
        with pytest.raises(KeyNotFoundError):
            store.get_by_name("api", "token")

    def test_scenario_e_missing_resource(self, store, logger, base_dir):
        """Fichier absent -> ResourceNotFoundError et diagnostic."""
        with pytest.raises(ResourceNotFoundError) as exc:
            store.get_by_name("missing-resource", "anykey")
        expected = base_dir / "etc" / "missing-resource.conf"
        assert exc.value.path == expected
        logger.log_error.assert_called_once()
        assert str(expected) in logger.log_error.call_args[0][0]

    @pytest.mark.parametrize("name,key", [("", "k"), ("api", ""), ("api", " ")])
    def test_missing_arguments(self, store, name, key):
        with pytest.raises(MissingArgumentsError) as exc:
            store.get_by_name(name, key)
        assert exc.value.exit_code == 2

    def test_get_by_path(self, store, tmp_path):
        path = tmp_path / "main.cf"
        path.write_text("relayhost = [smtp]:587\n")
        assert store.get_by_path(path, "relayhost") == "[smtp]:587"

    def test_lookup_default(self, store, base_dir):
        write_conf(base_dir, "api", "host = x\n")
        assert store.lookup("api", "host") == "x"
        assert store.lookup("api", "token") is None
        assert store.lookup("api", "token", "") == ""

    def test_lookup_missing_resource_still_raises(self, store):
        with pytest.raises(ResourceNotFoundError):
            store.lookup("nope", "host")

    def test_no_cache_between_calls(self, store, base_dir):
        path = write_conf(base_dir, "api", "host = a\n")
        assert store.get_by_name("api", "host") == "a"
        path.write_text("host = b\n")
        assert store.get_by_name("api", "host") == "b"

    def test_custom_layout(self, tmp_path):
        (tmp_path / "conf.d").mkdir()
        (tmp_path / "conf.d" / "api.ini").write_text("host = z\n")
        settings = StoreSettings(
            base_dir=tmp_path, conf_dir="conf.d", conf_suffix=".ini"
        )
        assert LinuxConfigStore(settings).get_by_name("api", "host") == "z"


class TestEntries:
    """Tests pour entries."""

    def test_lists_active_entries_only(self, store, base_dir):
        write_conf(base_dir, "api", "[s]\nhost = x\n# port = 1\ntoken=\n")
        entries = store.entries("api")
        assert [(e.key, e.value) for e in entries] == [
            ("host", "x"), ("token", "")
        ]

    def test_missing_resource(self, store):
        with pytest.raises(ResourceNotFoundError):
            store.entries("nope")


# Modification


class TestSet:
    """Tests pour set_by_path."""

    def test_scenario_b_modify(self, store, base_dir):
        path = write_conf(base_dir, "logger", "level = 1\n")
        result = store.set_by_path(path, "level=3")
        assert result.outcome is SetOutcome.MODIFIED
        assert result.line_number == 1
        assert read(path) == "level=3\n"
        assert store.get_by_name("logger", "level") == "3"

    def test_modify_keeps_indentation(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("[main]\n    level = 1\n")
        store.set_by_path(path, "level=2")
        assert read(path) == "[main]\n    level=2\n"

    def test_modify_writes_value_verbatim(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("motd = x\n")
        store.set_by_path(path, "motd= hello world ")
        assert read(path) == "motd= hello world \n"

    def test_modify_only_first_match(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("level = 1\nlevel = 2\n")
        store.set_by_path(path, "level=9")
        assert read(path) == "level=9\nlevel = 2\n"

    def test_scenario_c_append(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("host = x\n")
        result = store.set_by_path(path, "timeout=30")
        assert result.outcome is SetOutcome.APPENDED
        assert result.line_number == 2
        assert read(path) == "host = x\ntimeout = 30\n"

    def test_append_adds_missing_newline(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("host = x")
        store.set_by_path(path, "timeout=30")
        assert read(path) == "host = x\ntimeout = 30\n"

    def test_append_to_empty_file(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("")
        store.set_by_path(path, "timeout=30")
        assert read(path) == "timeout = 30\n"

    def test_append_keeps_crlf(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_bytes(b"host = x\r\n")
        store.set_by_path(path, "timeout=30")
        assert path.read_bytes() == b"host = x\r\ntimeout = 30\r\n"

    def test_append_empty_value(self, store, tmp_path):
        """Une affectation vide ajoute une entrée active."""
        path = tmp_path / "app.conf"
        path.write_text("")
        result = store.set_by_path(path, "token=")
        assert result.outcome is SetOutcome.APPENDED
        assert read(path) == "token = \n"
        assert store.get_by_path(path, "token") == ""

    def test_scenario_d_comment(self, store, base_dir):
        path = write_conf(base_dir, "app", "debug = true\n")
        result = store.set_by_path(path, "debug")
        assert result.outcome is SetOutcome.COMMENTED
        assert result.value is None
        assert read(path) == "# debug = true\n"
        with pytest.raises(KeyNotFoundError):
            store.get_by_name("app", "debug")

    def test_comment_indented_line(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("  debug = true\n")
        store.set_by_path(path, "debug")
        assert read(path) == "#   debug = true\n"

    def test_bare_key_absent_appends_placeholder(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("host = x\n")
        result = store.set_by_path(path, "debug")
        assert result.outcome is SetOutcome.APPENDED
        assert read(path) == "host = x\n# debug =\n"
        with pytest.raises(KeyNotFoundError):
            store.get_by_path(path, "debug")

    def test_placeholder_matches_commented_form(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("[net]\n    # timeout = 10\n    retries = 2\n")
        store.set_by_path(path, "timeout")
        store.set_by_path(path, "retries")
        assert read(path) == (
            "[net]\n    # timeout = 10\n#     retries = 2\n#     timeout =\n"
        )

    def test_commented_line_does_not_count_as_existing(self, store, tmp_path):
        """Une entrée commentée n'est pas modifiée : la clé est ajoutée."""
        path = tmp_path / "app.conf"
        path.write_text("# level = 1\n")
        result = store.set_by_path(path, "level=2")
        assert result.outcome is SetOutcome.APPENDED
        assert read(path) == "# level = 1\nlevel = 2\n"

    def test_missing_resource_not_created(self, store, tmp_path):
        path = tmp_path / "absent.conf"
        with pytest.raises(ResourceNotFoundError):
            store.set_by_path(path, "a=1")
        assert not path.exists()

    @pytest.mark.parametrize("relative", ["absent.conf", "nodir/x.conf"])
    def test_missing_resource_with_lock_file(self, tmp_path, relative):
        store = LinuxConfigStore(StoreSettings(lock_file=True))
        with pytest.raises(ResourceNotFoundError):
            store.set_by_path(tmp_path / relative, "a=1")
        assert list(tmp_path.iterdir()) == []

    def test_latin1_bytes_are_preserved(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_bytes(b"# r\xe9glage\nlevel = 1\n")
        assert store.get_by_path(path, "level") == "1"
        result = store.set_by_path(path, "level=3")
        assert result.outcome is SetOutcome.MODIFIED
        assert path.read_bytes() == b"# r\xe9glage\nlevel=3\n"

    def test_directory_is_not_a_resource(self, store, tmp_path):
        with pytest.raises(ResourceNotFoundError):
            store.set_by_path(tmp_path, "a=1")

    @pytest.mark.parametrize("path,spec", [("", "a=1"), ("x.conf", "")])
    def test_missing_arguments(self, store, path, spec):
        with pytest.raises(MissingArgumentsError):
            store.set_by_path(path, spec)

    def test_logs_status_line(self, store, logger, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("level = 1\n")
        store.set_by_path(path, "level=3")
        message = logger.log_info.call_args[0][0]
        assert "level = 3" in message
        assert str(path) in message

    def test_describe(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("a = 1\n")
        assert store.set_by_path(path, "a=2").describe() == (
            "Élément modifié : a = 2"
        )
        assert store.set_by_path(path, "a").describe() == (
            "Élément mis en commentaire : a"
        )
        assert store.set_by_path(path, "b=1").describe() == (
            "Élément ajouté : b = 1"
        )


class TestSetProperties:
    """Propriétés de lecture/écriture du magasin."""

    CONTENT = (
        "# Fichier d'exemple\n"
        "[main]\n"
        "    host = example.com\n"
        "\n"
        "    # timeout = 10\n"
        "port=8080\r\n"
        "name = x # pas un commentaire\n"
    )

    @pytest.fixture
    def conf(self, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text(self.CONTENT, newline="")
        return path

    @pytest.mark.parametrize("key,value", [
        ("level", "3"), ("url", "http://h/?a=b"), ("empty", ""),
    ])
    def test_read_your_write(self, store, conf, key, value):
        store.set_by_path(conf, f"{key}={value}")
        assert store.get_by_path(conf, key) == value

    def test_idempotent_modify(self, store, conf):
        store.set_by_path(conf, "port=9090")
        once = read(conf)
        store.set_by_path(conf, "port=9090")
        assert read(conf) == once

    def test_other_lines_preserved(self, store, conf):
        before = read(conf).splitlines(keepends=True)
        store.set_by_path(conf, "port=9090")
        after = read(conf).splitlines(keepends=True)
        assert after[:5] == before[:5]
        assert after[5] == "port=9090\r\n"
        assert after[6:] == before[6:]

    def test_comment_out_hides_value(self, store, conf):
        store.set_by_path(conf, "host")
        with pytest.raises(KeyNotFoundError):
            store.get_by_path(conf, "host")
        assert "#     host = example.com\n" in read(conf)

    def test_append_reuses_comment_indentation(self, store, conf):
        store.set_by_path(conf, "timeout=30")
        assert read(conf).endswith("    timeout = 30\n")

    def test_append_without_trace_has_no_indentation(self, store, conf):
        store.set_by_path(conf, "retries=5")
        assert read(conf).endswith("\nretries = 5\n")


class TestSetWriting:
    """Écriture, permissions, concurrence et audit."""

    def test_file_mode_preserved(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("a = 1\n")
        os.chmod(path, 0o640)
        store.set_by_path(path, "a=2")
        assert (path.stat().st_mode & 0o777) == 0o640

    def test_no_temporary_file_left(self, store, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("a = 1\n")
        store.set_by_path(path, "a=2")
        assert list(tmp_path.glob(".app.conf.*.tmp")) == []
        assert read(path) == "a=2\n"

    def test_in_place_write(self, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("a = 1\n")
        inode = path.stat().st_ino
        store = LinuxConfigStore(StoreSettings(atomic_write=False))
        store.set_by_path(path, "a=2")
        assert read(path) == "a=2\n"
        assert path.stat().st_ino == inode

    def test_write_failure_surfaces(self, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("a = 1\n")
        resource = MagicMock()
        resource.exists.return_value = True
        resource.read_text.return_value = "a = 1\n"
        resource.write_text.side_effect = WriteFailureError("disque plein")
        audit = MagicMock(spec=SecurityLogger)
        store = LinuxConfigStore(resource=resource, security_logger=audit)

        with pytest.raises(WriteFailureError):
            store.set_by_path(path, "a=2")
        event = audit.log_event.call_args[0][0]
        assert event.severity == "error"
        assert str(event.event_type) == "write.failure"

    def test_audit_event_on_change(self, tmp_path):
        path = tmp_path / "app.conf"
        path.write_text("a = 1\n")
        audit_logger = MagicMock(spec=Logger)
        store = LinuxConfigStore(
            security_logger=SecurityLogger(audit_logger)
        )
        store.set_by_path(path, "a=2")

        payload = json.loads(audit_logger.log_info.call_args[0][0])
        assert payload["security_event"] == "config.change"
        assert payload["resource"] == str(path)
        assert payload["details"] == {
            "key": "a", "outcome": "modified", "line": 1
        }

    @pytest.mark.parametrize("lock_file", [False, True])
    def test_concurrent_appends_are_serialised(self, tmp_path, lock_file):
        path = tmp_path / "app.conf"
        path.write_text("")
        store = LinuxConfigStore(StoreSettings(lock_file=lock_file))
        keys = [f"key{i}" for i in range(20)]

        threads = [
            threading.Thread(target=store.set_by_path, args=(path, f"{k}=1"))
            for k in keys
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for key in keys:
            assert store.get_by_path(path, key) == "1"
