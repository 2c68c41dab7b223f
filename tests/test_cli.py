import logging
import os

import pytest
from flask import Flask

from local_fileserver import cli
from local_fileserver.config import Config


def test_defaults(root):
    config, level = cli.load_config(["--dir", str(root)], environ={})

    assert config == Config(root=str(root))
    assert config.port == 8080
    assert config.host == "0.0.0.0"
    assert config.local_only is True
    assert config.max_depth == 10
    assert config.max_upload_bytes is None
    assert level == "INFO"


def test_flags(root):
    config, level = cli.load_config(
        ["-p", "9000", "-d", str(root), "--no-local", "--depth", "3",
         "--max-upload-mb", "2", "--log-level", "debug"],
        environ={},
    )

    assert config.port == 9000
    assert config.local_only is False
    assert config.max_depth == 3
    assert config.max_upload_bytes == 2 * 1024 * 1024
    assert level == "DEBUG"


def test_environment_supplies_defaults(root):
    environ = {
        "FILESERVER_PORT": "9100",
        "FILESERVER_DIR": str(root),
        "FILESERVER_LOCAL_ONLY": "off",
        "FILESERVER_DEPTH": "2",
        "FILESERVER_LOG_LEVEL": "warning",
    }

    config, level = cli.load_config([], environ=environ)

    assert config.port == 9100
    assert os.path.samefile(config.root, str(root))
    assert config.local_only is False
    assert config.max_depth == 2
    assert level == "WARNING"


def test_flags_win_over_environment(root):
    environ = {"FILESERVER_PORT": "9100", "FILESERVER_LOCAL_ONLY": "false"}

    config, _ = cli.load_config(["--dir", str(root), "--port", "7000", "--local"], environ=environ)

    assert config.port == 7000
    assert config.local_only is True


def test_relative_directory_is_made_absolute(root, monkeypatch):
    monkeypatch.chdir(root.parent)

    config, _ = cli.load_config(["--dir", root.name], environ={})

    assert os.path.isabs(config.root)
    assert os.path.samefile(config.root, str(root))


@pytest.mark.parametrize("argv, environ", [
    (["--dir", "/definitely/not/here"], {}),
    (["--depth", "-1"], {}),
    (["--port", "70000"], {}),
    (["--max-upload-mb", "0"], {}),
    (["--log-level", "chatty"], {}),
    ([], {"FILESERVER_LOCAL_ONLY": "maybe"}),
    ([], {"FILESERVER_PORT": "eighty"}),
])
def test_bad_configuration_exits(root, argv, environ):
    if "--dir" not in argv:
        argv = argv + ["--dir", str(root)]

    with pytest.raises(SystemExit) as excinfo:
        cli.load_config(argv, environ=environ)

    assert excinfo.value.code == 2


def test_served_file_instead_of_directory_exits(root):
    target = root / "file.txt"
    target.write_text("x")

    with pytest.raises(SystemExit):
        cli.load_config(["--dir", str(target)], environ={})


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.load_config(["--version"], environ={})

    assert excinfo.value.code == 0
    assert "Local File Server v1.0.0" in capsys.readouterr().out


def test_config_expands_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))

    assert Config(root="~/shared").root == os.path.join(str(tmp_path), "shared")


def test_main_builds_app_and_serves(root, monkeypatch, caplog):
    calls = []
    monkeypatch.setattr(Flask, "run", lambda self, **kwargs: calls.append(kwargs))
    monkeypatch.setattr(cli, "local_addresses", lambda: ["192.168.1.20"])
    for name in ("FILESERVER_PORT", "FILESERVER_DIR", "FILESERVER_HOST", "FILESERVER_LOCAL_ONLY",
                 "FILESERVER_DEPTH", "FILESERVER_MAX_UPLOAD_MB", "FILESERVER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    caplog.set_level(logging.INFO)

    cli.main(["--dir", str(root), "--port", "8123", "--host", "127.0.0.1"])

    assert calls == [{"host": "127.0.0.1", "port": 8123, "threaded": True}]
    assert "Serving files from: %s" % root in caplog.text
    assert "http://192.168.1.20:8123" in caplog.text
    assert "http://localhost:8123" in caplog.text
