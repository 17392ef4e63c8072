from __future__ import annotations

import json
import logging

from ens_runner.cli import cli
from ens_runner.logging_utils import get_logger, log_transaction, setup_logging

from .conftest import OWNER_KEY, TX_HASH, UNKNOWN_ADDRESS


def test_transaction_records_are_written_as_json_lines(tmp_path):
    log_file = tmp_path / "logs" / "ens.log"
    setup_logging(log_file)

    log_transaction({"group": "ens/resolver", "command": "clear", "transactionid": TX_HASH})

    lines = log_file.read_text().splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["msg"] == "success"
    assert record["group"] == "ens/resolver"
    assert record["transactionid"] == TX_HASH


def test_repeated_setup_does_not_stack_handlers(tmp_path):
    setup_logging(tmp_path / "a.log", verbose=True)
    setup_logging(tmp_path / "b.log", verbose=True)

    installed = [h for h in get_logger().handlers if getattr(h, "_ens_runner_handler", False)]
    assert len(installed) == 2


def test_cli_log_option_records_transaction(runner, factory, tmp_path):
    log_file = tmp_path / "tx.log"

    result = runner.invoke(
        cli,
        ["--log", str(log_file), "ens", "resolver", "clear", "--domain=enstest.eth", f"--privatekey={OWNER_KEY}"],
    )

    assert result.exit_code == 0, result.output
    record = json.loads(log_file.read_text().splitlines()[-1])
    assert record["command"] == "clear"
    assert record["domain"] == "enstest.eth"
    assert record["transactionid"] == TX_HASH


def test_verbose_mirrors_fields_to_stderr(runner, factory):
    result = runner.invoke(
        cli, ["--verbose", "ens", "resolver", "clear", "--domain=enstest.eth", f"--privatekey={OWNER_KEY}"]
    )

    assert result.exit_code == 0, result.output
    assert "success" in result.stderr
    assert f"transactionid={TX_HASH}" in result.stderr


def test_failures_stay_out_of_transaction_log(runner, factory, fake_client, tmp_path, caplog):
    fake_client._owner = UNKNOWN_ADDRESS
    log_file = tmp_path / "tx.log"

    with caplog.at_level(logging.ERROR, logger="ens_runner"):
        result = runner.invoke(
            cli,
            ["--log", str(log_file), "ens", "resolver", "clear", "--domain=enstest.eth", f"--privatekey={OWNER_KEY}"],
        )

    assert result.exit_code == 1
    assert log_file.read_text() == ""
    assert any("precondition error" in record.getMessage() for record in caplog.records)


def test_quiet_overrides_verbose_on_failure(runner, factory, fake_client):
    fake_client._owner = UNKNOWN_ADDRESS

    result = runner.invoke(
        cli,
        ["--quiet", "--verbose", "ens", "resolver", "clear", "--domain=enstest.eth", f"--privatekey={OWNER_KEY}"],
    )

    assert result.exit_code == 1
    assert result.stdout == ""
    assert result.stderr == ""


def test_quiet_overrides_verbose_on_success(runner, factory):
    result = runner.invoke(
        cli,
        ["--quiet", "--verbose", "ens", "resolver", "clear", "--domain=enstest.eth", f"--privatekey={OWNER_KEY}"],
    )

    assert result.exit_code == 0
    assert result.stdout == ""
    assert result.stderr == ""
