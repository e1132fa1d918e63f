from __future__ import annotations

import json

import pytest

from pool_price.cli import main


def _inputs(write_csv):
    prices = write_csv(
        "prices.csv",
        [
            "01/01/2024 00:00:00;5,0",
            "01/01/2024 01:00:00;−1,0",
            "01/03/2024 05:00:00;3,0",
        ],
    )
    energy = write_csv(
        "energy.csv",
        ["1.1.2024 00:00;10,0", "1.1.2024 01:00;2,0"],
    )
    return str(prices), str(energy)


def test_main_prints_text_report(write_csv, capsys):
    prices, energy = _inputs(write_csv)

    assert main([prices, energy]) == 0

    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Monthly Report:"
    assert "Month: January 2024, Total Energy: 12.00 kWh, Total Cost: €0.54" in out
    assert "Winter Summary:" in out


def test_main_prints_json_with_custom_margin(write_csv, capsys):
    prices, energy = _inputs(write_csv)

    assert main([prices, energy, "--json", "--margin", "0"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["monthly"][0]["period"] == "January 2024"
    assert payload["monthly"][0]["cost_eur"] == 0.48
    assert [item["period"] for item in payload["winter"]] == ["2024"]


def test_main_fails_without_report_on_malformed_input(write_csv, capsys):
    prices = write_csv("prices.csv", ["01/01/2024 00:00:00;5,0", "yesterday;1,0"])
    energy = write_csv("energy.csv", ["1.1.2024 00:00;10,0"])

    assert main([str(prices), str(energy)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""


def test_main_fails_on_missing_file(tmp_path, write_csv, capsys):
    energy = write_csv("energy.csv", ["1.1.2024 00:00;10,0"])

    assert main([str(tmp_path / "missing.csv"), str(energy)]) == 1
    assert capsys.readouterr().out == ""


def test_main_rejects_invalid_settings(write_csv):
    prices, energy = _inputs(write_csv)

    assert main([prices, energy, "--margin", "-3"]) == 2


def test_main_skips_header_of_consumption_file_only(write_csv, capsys):
    prices = write_csv("prices.csv", ["01/01/2024 00:00:00;5,0", "01/01/2024 01:00:00;4,5"])
    energy = write_csv(
        "energy.csv",
        ["Aikaleima;Kulutus", "1.1.2024 00:00;10,0", "1.1.2024 01:00;10,0"],
    )

    assert main([str(prices), str(energy), "--skip-consumption-header", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["monthly"][0]["energy_kwh"] == 20.0
    assert payload["monthly"][0]["cost_eur"] == 1.05


def test_main_accepts_lowercase_log_level(write_csv, capsys):
    prices, energy = _inputs(write_csv)

    assert main([prices, energy, "--log-level", "debug"]) == 0


def test_main_rejects_unknown_log_level(write_csv, capsys):
    prices, energy = _inputs(write_csv)

    with pytest.raises(SystemExit) as excinfo:
        main([prices, energy, "--log-level", "foo"])

    assert excinfo.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
