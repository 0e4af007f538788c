# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from shadowtree.core.model_types import LogComponent, LogFormat, Namespace, Outcome
from shadowtree.logging import LOG_LEVELS, configure_logging, structured_extra
from shadowtree.pipeline import ResolutionPipeline

if TYPE_CHECKING:
    from pathlib import Path

    from tests.fixtures.trees import SourceTreeBuilder

pytestmark = pytest.mark.unit


def test_configure_logging_json_emits_structured_logs(capsys: pytest.CaptureFixture[str]) -> None:
    config = configure_logging("json", log_level="debug")
    assert config.format is LogFormat.JSON
    assert config.level == logging.DEBUG
    logger = logging.getLogger("shadowtree.pipeline")
    logger.debug(
        "decided",
        extra=structured_extra(
            LogComponent.PIPELINE,
            specifier="./Header",
            namespace=Namespace.CORE,
            outcome=Outcome.FOUND,
            duration_ms=0.5,
            cached=False,
        ),
    )
    captured = capsys.readouterr()
    payload = json.loads(captured.err.strip().splitlines()[-1])
    assert payload["message"] == "decided"
    assert payload["level"] == "debug"
    assert payload["logger"] == "shadowtree.pipeline"
    assert payload["component"] == "pipeline"
    assert payload["specifier"] == "./Header"
    assert payload["namespace"] == "core"
    assert payload["outcome"] == "found"
    assert payload["duration_ms"] == 0.5
    assert payload["cached"] is False


def test_configure_logging_defaults_to_warning(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("SHADOWTREE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SHADOWTREE_LOG_FORMAT", raising=False)
    assert LOG_LEVELS == ("debug", "info", "warning", "error")
    config = configure_logging()
    assert config.level_name == "warning"
    logger = logging.getLogger("shadowtree")
    logger.info("ignored")
    logger.warning("recorded")
    err = capsys.readouterr().err
    assert "ignored" not in err
    assert "[WARNING] recorded" in err


def test_configure_logging_honors_env_overrides(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SHADOWTREE_LOG_FORMAT", "json")
    monkeypatch.setenv("SHADOWTREE_LOG_LEVEL", "error")
    _ = configure_logging()
    logger = logging.getLogger("shadowtree")
    logger.warning("warned")
    logger.error("failed", extra=structured_extra(LogComponent.CLI))
    lines = [line for line in capsys.readouterr().err.splitlines() if line]
    assert json.loads(lines[-1])["message"] == "failed"
    assert all("warned" not in line for line in lines)


def test_structured_extra_normalizes_inputs(tmp_path: Path) -> None:
    extra = structured_extra(
        LogComponent.PROBE,
        path=tmp_path / "ext" / "Header.tsx",
        importer=None,
        details={"logical": "Header"},
    )
    assert extra["component"] is LogComponent.PROBE
    assert "path" in extra
    assert extra["path"].endswith("Header.tsx")
    assert "importer" not in extra
    assert extra.get("details") == {"logical": "Header"}


def test_pipeline_logs_decisions(
    populated_tree: SourceTreeBuilder,
    caplog: pytest.LogCaptureFixture,
) -> None:
    pipeline = ResolutionPipeline(populated_tree.registry())
    with caplog.at_level(logging.DEBUG, logger="shadowtree.pipeline"):
        _ = pipeline.resolve("./components/Header", str(populated_tree.core_root / "App.tsx"))
    records = [record for record in caplog.records if record.name == "shadowtree.pipeline"]
    assert records
    record = records[-1]
    assert getattr(record, "rule", None) == "relative-from-core"
    assert getattr(record, "outcome", None) == "found"
