from __future__ import annotations

import pytest

from pyquarto.app_context import Toolkit
from pyquarto.config.models import Settings
from pyquarto.errors import ValidationError
from pyquarto.events.store import EventStore


@pytest.fixture
def kit(tmp_path, registry):
    return Toolkit(cwd=tmp_path, settings=Settings(), tools=registry, events=EventStore.open(tmp_path / "data"))


@pytest.mark.asyncio
async def test_execute_records_success_and_failure(kit):
    out = await kit.execute("ojs_transpose_data", {"ojs_data_variable": "d"})
    assert out["success"] is True
    with pytest.raises(ValidationError):
        await kit.execute("ojs_transpose_data", {})

    events = kit.events.iter_invocations()
    assert [(e.tool, e.ok) for e in events] == [("ojs_transpose_data", True), ("ojs_transpose_data", False)]
    assert events[0].error is None
    assert "ojs_data_variable is required" in events[1].error


def test_event_store_skips_torn_lines(tmp_path):
    store = EventStore.open(tmp_path)
    store.record("a", ok=True, duration_ms=3)
    with store.path.open("a", encoding="utf-8") as f:
        f.write('{"ts": 1, "tool": "b"')
    assert [e.tool for e in store.iter_invocations()] == ["a"]
    assert store.path.parent == tmp_path / "events"


def test_from_env_uses_project_settings(tmp_path):
    (tmp_path / "pyquarto.json").write_text('{"quarto_bin": "my-quarto"}')
    kit = Toolkit.from_env(tmp_path, quiet=True)
    assert kit.settings.quarto_bin == "my-quarto"
    assert kit.settings.quiet is True
    assert len(kit.list_tool_names()) == 44
    assert kit.validate_against_manifest().complete
    assert kit.context().cwd == str(tmp_path.resolve())
