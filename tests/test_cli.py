import json

import pytest

from product_extractor import cli
from product_extractor.core.errors import ConfigError, ExhaustedRetriesError, ParseError
from product_extractor.models.extraction import ExtractionResult
from product_extractor.prompts.prompt import SAMPLE_DESCRIPTION

from conftest import SPEEDSTER


@pytest.fixture()
def calls(monkeypatch):
    seen = []

    async def fake_extract(text, settings):
        seen.append((text, settings))
        return ExtractionResult.model_validate(SPEEDSTER)

    monkeypatch.setattr(cli, "extract_product", fake_extract)
    monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
    return seen


def _failing(monkeypatch, error):
    async def fake_extract(text, settings):
        raise error

    monkeypatch.setattr(cli, "extract_product", fake_extract)


def test_prints_result_as_indented_json(calls, capsys):
    assert cli.main([]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert json.loads(out) == SPEEDSTER
    assert out.startswith("{\n  ")
    assert calls[0][0] == SAMPLE_DESCRIPTION


def test_text_argument_and_overrides(calls, capsys):
    cli.main(["Moka pot, $40", "--model", "llama-3.1-8b-instant", "--temperature", "0", "--max-retries", "5"])
    text, settings = calls[0]
    assert text == "Moka pot, $40"
    assert settings.model_id == "llama-3.1-8b-instant"
    assert settings.temperature == 0.0
    assert settings.max_retries == 5


def test_reads_file(calls, tmp_path, capsys):
    source = tmp_path / "product.txt"
    source.write_text("Grinder with 40 settings", encoding="utf-8")
    cli.main(["--file", str(source)])
    assert calls[0][0] == "Grinder with 40 settings"


def test_reads_stdin(calls, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", __import__("io").StringIO("from stdin"))
    cli.main(["-"])
    assert calls[0][0] == "from stdin"


@pytest.mark.parametrize(
    "error, code",
    [
        (ConfigError("GROQ_API_KEY is not set"), cli.EXIT_CONFIG),
        (ExhaustedRetriesError(attempts=3), cli.EXIT_PROVIDER),
        (ParseError("No JSON object found in completion", raw_text="sorry"), cli.EXIT_PARSE),
    ],
)
def test_failures_map_to_exit_codes(monkeypatch, capsys, error, code):
    _failing(monkeypatch, error)
    assert cli.main(["x"]) == code
    captured = capsys.readouterr()
    assert captured.out == ""
    assert error.code in captured.err


def test_parse_failure_prints_raw_completion(monkeypatch, capsys):
    _failing(monkeypatch, ParseError("No JSON object found in completion", raw_text="I cannot help"))
    cli.main(["x"])
    assert "I cannot help" in capsys.readouterr().err


def test_bad_environment_value_exits_with_config_code(calls, monkeypatch, capsys):
    monkeypatch.setenv("TEMPERATURE", "warm")
    assert cli.main(["x"]) == cli.EXIT_CONFIG
    err = capsys.readouterr().err
    assert "CONFIG_ERROR" in err
    assert "temperature" in err
    assert calls == []


def test_out_of_range_flag_exits_with_config_code(monkeypatch, capsys):
    monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
    assert cli.main(["x", "--temperature", "3"]) == cli.EXIT_CONFIG
    assert "temperature" in capsys.readouterr().err


def test_json_mode_flag(calls, capsys):
    cli.main(["x", "--json-mode"])
    assert calls[0][1].json_mode is True
