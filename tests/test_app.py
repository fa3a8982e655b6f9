from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from fakes import FakeHttpClient, model_payload
from sketchfab_embed import app, settings

LINK = '<a href="https://sketchfab.com/models/abc123">A Model</a>'


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch) -> None:
    for name in [*settings.ENV_OVERRIDES, "SKETCHFAB_HTTP_TIMEOUT"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings, "load_dotenv", lambda: False)


def test_links_lists_model_ids_without_network(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.setattr(app, "UrllibHttpClient", None)
    source = tmp_path / "page.html"
    source.write_text(f"<p>{LINK}</p><a href='https://sketchfab.com/models/x_2'>two\nlines</a>", encoding="utf-8")

    app.main(["--config", str(tmp_path / "none.json"), "links", str(source)])

    assert capsys.readouterr().out == "abc123\tA Model\nx_2\ttwo lines\n"


def test_filter_writes_converted_html(tmp_path, monkeypatch) -> None:
    fake = FakeHttpClient({"https://api.sketchfab.com/v2/models/abc123": model_payload("Cool Thing", "Jane")})
    monkeypatch.setattr(app, "UrllibHttpClient", lambda timeout, user_agent: fake)
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"embed": {"width": 640}}), encoding="utf-8")
    source = tmp_path / "page.html"
    source.write_text(f"<p>{LINK}</p>", encoding="utf-8")
    target = tmp_path / "out.html"

    app.main(["--config", str(config), "filter", str(source), "-o", str(target)])

    output = target.read_text(encoding="utf-8")
    assert output.startswith('<p><div class="sketchfab-embed">')
    assert 'width="640"' in output
    assert ">Cool Thing</a>" in output


def test_missing_input_exits_with_error(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app.main(["--config", str(tmp_path / "none.json"), "links", str(tmp_path / "nope.html")])

    assert excinfo.value.code == 1
    assert "sketchfab-embed:" in capsys.readouterr().err


def test_invalid_config_exits_with_error(tmp_path, capsys) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"embed": {"width": -1}}), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        app.main(["--config", str(config), "links", "-"])

    assert excinfo.value.code == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_configure_logging_writes_to_rotating_file(tmp_path) -> None:
    loaded = settings.Settings(
        embed=settings.EmbedConfig(),
        logging={
            "enabled": True,
            "level": "debug",
            "console": False,
            "file": {"enabled": True, "path": "logs/run.log", "backup_count": 2},
        },
        project_root=str(tmp_path),
    )
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        app._configure_logging(loaded)
        handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert handlers[0].backupCount == 2
        assert root.level == logging.DEBUG
        logging.getLogger("sketchfab_embed.tests").info("hello log")
        handlers[0].flush()
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)

    assert "INFO sketchfab_embed.tests: hello log" in (tmp_path / "logs" / "run.log").read_text(encoding="utf-8")


def test_configure_logging_disabled_adds_nothing() -> None:
    root = logging.getLogger()
    before = root.handlers[:]

    app._configure_logging(settings.Settings(embed=settings.EmbedConfig(), logging={"enabled": False}))

    assert root.handlers == before
