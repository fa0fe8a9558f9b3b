"""Tests for tracer_utils.config: protocol constants are fixed at import."""

import importlib
import json
import os
import subprocess
import sys
from pathlib import Path

from tracer_utils import config, generate_domain_data

PROJECT_ROOT = Path(__file__).resolve().parents[2]

IMPORT_SCRIPT = """
import json, os
import tracer_utils
from tracer_utils import calc_minimum_margin, generate_domain_data
print(json.dumps({
    "minimum_margin": calc_minimum_margin(1200, -10, 100, 50),
    "domain_name": generate_domain_data("0x" + "ab" * 20)["name"],
    "host_secret": os.environ.get("HOST_APP_SECRET"),
}))
"""


def test_protocol_constants() -> None:
    assert config.DOMAIN_NAME == "Tracer Protocol"
    assert config.DOMAIN_VERSION == "1.0"
    assert config.DEFAULT_CHAIN_ID == 1337
    assert config.LIQUIDATION_GAS_COST == 25


def test_import_ignores_dotenv_and_environment(tmp_path) -> None:
    # a host application's .env and environment must not leak into the library
    (tmp_path / ".env").write_text(
        "TRACER_LIQUIDATION_GAS_COST=30\n"
        "TRACER_DOMAIN_NAME=Other\n"
        "HOST_APP_SECRET=leaked\n"
    )
    env = {key: value for key, value in os.environ.items() if key != "HOST_APP_SECRET"}
    env["TRACER_DOMAIN_VERSION"] = "9.9"
    env["TRACER_CHAIN_ID"] = "5"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))

    completed = subprocess.run(
        [sys.executable, "-c", IMPORT_SCRIPT],
        cwd=tmp_path, env=env, capture_output=True, text=True, check=True,
    )
    result = json.loads(completed.stdout.strip().splitlines()[-1])

    assert result["minimum_margin"] == 170
    assert result["domain_name"] == "Tracer Protocol"
    assert result["host_secret"] is None


def test_import_leaves_environ_unchanged() -> None:
    before = dict(os.environ)
    importlib.reload(config)
    assert dict(os.environ) == before


def test_chain_id_is_a_keyword_override(monkeypatch) -> None:
    monkeypatch.setenv("TRACER_CHAIN_ID", "5")
    trader = "0x" + "ab" * 20
    assert generate_domain_data(trader)["chainId"] == 1337
    assert generate_domain_data(trader, chain_id=5)["chainId"] == 5
