"""End-to-end tests for the sparta command line and runner."""

from __future__ import annotations

import io

import pytest

from sparta import __version__
from sparta.cli import main
from sparta.errors import ConfigLoadError, TemplateExecError, UnknownProviderError
from sparta.functions import default_function_registry
from sparta.runner import run


@pytest.fixture
def project(tmp_path, monkeypatch):
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "deploy.yaml").write_text("env: {{ env }}\npassword: {{ password }}\n")
    (templates / "README.md").write_text("not a template")

    envs = tmp_path / "envs"
    envs.mkdir()
    (envs / "staging.yaml").write_text(
        "values:\n  env: staging\n"
        "secrets:\n  password: 'environment:stg:DB_PASSWORD'\n"
        "secret_providers:\n  stg:\n    prefix: STAGING_\n"
    )
    (envs / "prod.yaml").write_text(
        "values:\n  env: prod\n"
        "secrets:\n  password: 'environment:DB_PASSWORD'\n"
    )
    monkeypatch.setenv("STAGING_DB_PASSWORD", "stg-pw")
    monkeypatch.setenv("DB_PASSWORD", "prod-pw")
    return tmp_path


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out == f"sparta version {__version__}\n"


def test_template_required(capsys):
    with pytest.raises(SystemExit) as info:
        main(["-c", "x.yaml"])
    assert info.value.code == 2
    assert "--template" in capsys.readouterr().err


def test_renders_to_stdout(project, capsys):
    code = main([
        "-t", str(project / "templates"),
        "-c", str(project / "envs" / "staging.yaml"),
        "-c", str(project / "envs" / "prod.yaml"),
    ])
    assert code == 0
    assert capsys.readouterr().out == (
        "env: staging\npassword: stg-pw\n"
        "env: prod\npassword: prod-pw\n"
    )


def test_renders_to_output_dir(project, capsys):
    out = project / "out"
    code = main([
        "-t", str(project / "templates"),
        "-c", str(project / "envs" / "staging.yaml"),
        "-c", str(project / "envs" / "prod.yaml"),
        "-o", str(out),
    ])
    assert code == 0
    assert (out / "staging" / "deploy.yaml").read_text() == "env: staging\npassword: stg-pw\n"
    assert (out / "prod" / "deploy.yaml").read_text() == "env: prod\npassword: prod-pw\n"
    assert not (out / "prod" / "README.md").exists()

    err = capsys.readouterr().err
    assert "Processing template:" in err
    assert str(out / "prod" / "deploy.yaml") in err


def test_failed_config_does_not_stop_others(project, capsys, monkeypatch):
    monkeypatch.delenv("STAGING_DB_PASSWORD")
    out = project / "out"
    code = main([
        "-t", str(project / "templates"),
        "-c", str(project / "envs" / "staging.yaml"),
        "-c", str(project / "envs" / "prod.yaml"),
        "-o", str(out),
    ])
    assert code == 1
    assert not (out / "staging").exists()
    assert (out / "prod" / "deploy.yaml").exists()

    err = capsys.readouterr().err
    assert "Error: processing config" in err
    assert "environment:stg:DB_PASSWORD" in err


def test_no_configs(project, capsys):
    assert main(["-t", str(project / "templates")]) == 0
    assert "No config files given" in capsys.readouterr().err


class TestRunner:
    def test_collects_failures(self, project, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("secrets:\n  x: 'vault:k'\n")
        stream = io.StringIO()

        result = run(
            project / "templates",
            [tmp_path / "missing.yaml", bad, project / "envs" / "prod.yaml"],
            stream=stream,
        )

        assert not result.ok
        failures = dict(result.failures)
        assert isinstance(failures[str(tmp_path / "missing.yaml")], ConfigLoadError)
        assert isinstance(failures[str(bad)], UnknownProviderError)
        assert result.rendered == [
            (str(project / "envs" / "prod.yaml"), [project / "templates" / "deploy.yaml"]),
        ]
        assert stream.getvalue() == "env: prod\npassword: prod-pw\n"

    def test_custom_registries(self, providers, tmp_path):
        (tmp_path / "t.yaml").write_text("{{ x }} {{ y }}")
        config = tmp_path / "dev.yaml"
        config.write_text("values:\n  x: 1\nsecrets:\n  y: 'dummy:k'\n")
        stream = io.StringIO()

        result = run(tmp_path / "t.yaml", [config], providers=providers, stream=stream)
        assert result.ok
        assert stream.getvalue() == "1 v"

    def test_render_error_does_not_stop_later_configs(self, tmp_path):
        template = tmp_path / "t.yaml"
        template.write_text("{{ 1 // n }}\n")
        zero = tmp_path / "zero.yaml"
        zero.write_text("values:\n  n: 0\n")
        one = tmp_path / "one.yaml"
        one.write_text("values:\n  n: 1\n")
        stream = io.StringIO()

        result = run(template, [zero, one], stream=stream)

        assert [path for path, _ in result.failures] == [str(zero)]
        error = result.failures[0][1]
        assert isinstance(error, TemplateExecError)
        assert "ZeroDivisionError" in str(error)
        assert isinstance(error.__cause__, ZeroDivisionError)
        assert result.rendered == [(str(one), [template])]
        assert stream.getvalue() == "1\n"

    def test_raising_custom_function_is_reported(self, tmp_path):
        def explode():
            raise RuntimeError("vault sealed")

        functions = default_function_registry()
        functions.register("explode", explode)
        template = tmp_path / "t.yaml"
        template.write_text("{{ explode() }}")
        config = tmp_path / "dev.yaml"
        config.write_text("values: {}\n")

        result = run(template, [config], functions=functions, stream=io.StringIO())
        [(path, error)] = result.failures
        assert isinstance(error, TemplateExecError)
        assert "RuntimeError: vault sealed" in str(error)

    def test_repeated_config_keeps_every_outcome(self, project):
        prod = project / "envs" / "prod.yaml"
        stream = io.StringIO()

        result = run(project / "templates", [prod, prod], stream=stream)

        assert [path for path, _ in result.rendered] == [str(prod), str(prod)]
        assert stream.getvalue() == "env: prod\npassword: prod-pw\n" * 2
