"""Tests for the command-line entry point."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from factories import success
from memory_curator import cli
from memory_curator.orchestrator.state import RunSummary


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("memory_curator.cli.setup_logging"):
        yield


def test_parser_rejects_out_of_range_threshold():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["run", "--threshold", "1.5"])


def test_parser_run_options():
    args = cli.build_parser().parse_args(
        ["run", "--dry-run", "--page-size", "10", "--max-pages", "3", "--summary-only"]
    )
    assert args.dry_run is True
    assert args.page_size == 10
    assert args.max_pages == 3
    assert args.summary_only is True
    assert args.func is cli.cmd_run


def test_run_without_credentials_exits_with_config_error(bare_settings, capsys):
    with patch("memory_curator.cli.get_settings", return_value=bare_settings):
        code = cli.main(["run", "--dry-run"])

    assert code == cli.EXIT_CONFIG_ERROR
    assert "OPENMEMORY_BEARER_TOKEN" in capsys.readouterr().err


@patch("memory_curator.cli.close_shared_client", new_callable=AsyncMock)
@patch("memory_curator.cli.RetentionPipeline")
@patch("memory_curator.cli.MemoryStoreClient")
def test_run_prints_summary(
    mock_store_class, mock_pipeline_class, mock_close, settings, capsys
):
    mock_pipeline = MagicMock()
    mock_pipeline.run = AsyncMock(
        return_value=RunSummary(dry_run=True, pages_fetched=2, total_pages=2)
    )
    mock_pipeline_class.return_value = mock_pipeline

    with patch("memory_curator.cli.get_settings", return_value=settings):
        code = cli.main(["run", "--dry-run", "--summary-only", "--threshold", "0.9"])

    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["dry_run"] is True
    assert output["pages_fetched"] == 2
    assert "outcomes" not in output
    kwargs = mock_pipeline_class.call_args.kwargs
    assert kwargs["dry_run"] is True
    assert kwargs["delete_threshold"] == 0.9
    mock_close.assert_awaited_once()


@patch("memory_curator.cli.close_shared_client", new_callable=AsyncMock)
@patch("memory_curator.cli.ClassificationFanOut")
def test_classify_writes_output_file(mock_fan_out_class, mock_close, settings, tmp_path):
    mock_fan_out = MagicMock()
    mock_fan_out.classify_all = AsyncMock(
        return_value=[success("x", "long-term"), success("y", "long-term")]
    )
    mock_fan_out_class.return_value = mock_fan_out
    output_path = tmp_path / "out" / "result.json"

    with patch("memory_curator.cli.get_settings", return_value=settings):
        code = cli.main(
            ["classify", "My blood type is O+", "--model", "x", "--model", "y",
             "--output", str(output_path)]
        )

    assert code == 0
    result = json.loads(output_path.read_text(encoding="utf-8"))
    assert result["final_verdict"] == "long-term"
    assert result["action"] == "retain"
    mock_fan_out.classify_all.assert_awaited_once_with(["x", "y"], "My blood type is O+")
    mock_close.assert_awaited_once()


def test_classify_only_needs_inference_key(bare_settings, capsys):
    with patch("memory_curator.cli.get_settings", return_value=bare_settings):
        code = cli.main(["classify", "text"])

    assert code == cli.EXIT_CONFIG_ERROR
    err = capsys.readouterr().err
    assert "OPENAI_API_KEY" in err
    assert "OPENMEMORY_BEARER_TOKEN" not in err


def test_serve_starts_uvicorn(settings):
    with patch("memory_curator.cli.get_settings", return_value=settings), patch(
        "uvicorn.run"
    ) as mock_run:
        code = cli.main(["serve", "--port", "9000"])

    assert code == 0
    mock_run.assert_called_once_with("memory_curator.app:app", host="127.0.0.1", port=9000)


def test_invalid_log_level_is_rejected_by_parser(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--log-level", "loud", "classify", "x"])

    assert exc_info.value.code == cli.EXIT_CONFIG_ERROR
    assert "--log-level" in capsys.readouterr().err


def test_log_level_is_case_insensitive():
    args = cli.build_parser().parse_args(["--log-level", "debug", "classify", "x"])
    assert args.log_level == "DEBUG"
