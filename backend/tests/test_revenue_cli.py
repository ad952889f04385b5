import json

import pytest

import revenue_cli


@pytest.fixture(autouse=True)
def _reset_cli_state(monkeypatch):
    monkeypatch.setattr(revenue_cli, "BASE_URL", "http://localhost:8000")
    monkeypatch.setattr(revenue_cli, "DRY_RUN", False)


def test_load_yaml_list(tmp_path):
    path = tmp_path / "entries.yaml"
    path.write_text("- {month: January, year: 2025, revenue: 100}\n- {month: May, year: 2025, revenue: 5}\n")
    entries = revenue_cli.load_entries(str(path))
    assert [e["month"] for e in entries] == ["January", "May"]


def test_load_json_mapping_sets_base_url(tmp_path):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps({"baseUrl": "http://api.test/", "entries": [{"month": "June"}]}))
    entries = revenue_cli.load_entries(str(path))
    assert entries == [{"month": "June"}]
    assert revenue_cli.BASE_URL == "http://api.test"


def test_load_rejects_non_list(tmp_path):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps({"entries": "nope"}))
    with pytest.raises(ValueError):
        revenue_cli.load_entries(str(path))


def test_dry_run_sends_nothing(monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("no request expected in dry-run mode")

    monkeypatch.setattr(revenue_cli.SESSION, "post", _fail)
    monkeypatch.setattr(revenue_cli, "DRY_RUN", True)
    assert revenue_cli.import_entries([{"month": "May", "year": 2025, "revenue": 1}]) == 0


def test_render_chart_has_a_row_per_month_plus_total():
    body = {
        "year": 2025,
        "totalRevenue": 350,
        "data": {
            "labels": ["January", "February"] + ["x"] * 10,
            "datasets": [{"data": [150, 200] + [0] * 10}],
        },
    }
    assert revenue_cli.render_chart(body).row_count == 13


def test_token_command_prints_a_decodable_token(capsys, settings):
    from application.token_service import decode_access_token

    revenue_cli.main(["token", "--role", "employee", "--user-id", "ops"])
    token = capsys.readouterr().out.strip()
    assert decode_access_token(token, settings).role == "employee"
