"""Unit tests for loading stage collaborators from configuration."""

import sys
import types
from unittest.mock import MagicMock

import pytest

from trendcast.core.exceptions import CollaboratorsNotConfiguredError
from trendcast.services.pipeline.collaborators import (
    Narrator,
    ScriptWriter,
    StageCollaborators,
    load_stage_collaborators,
)

MODULE = "trendcast_deploy_collaborators"


@pytest.fixture
def deploy_module(monkeypatch) -> types.ModuleType:
    """A deployment module registered under MODULE."""
    module = types.ModuleType(MODULE)
    module.collaborators = StageCollaborators(
        script_writer=MagicMock(spec=ScriptWriter),
        narrator=MagicMock(spec=Narrator),
    )
    module.build = lambda: module.collaborators
    module.wrong = lambda: {"script_writer": None}
    monkeypatch.setitem(sys.modules, MODULE, module)
    return module


class TestLoadStageCollaborators:
    """Tests for load_stage_collaborators."""

    def test_factory(self, deploy_module):
        """Test a factory attribute is called."""
        assert load_stage_collaborators(f"{MODULE}:build") is deploy_module.collaborators

    def test_instance(self, deploy_module):
        """Test an instance attribute is used as is."""
        assert load_stage_collaborators(f"{MODULE}:collaborators") is deploy_module.collaborators

    def test_unset(self):
        with pytest.raises(CollaboratorsNotConfiguredError) as exc_info:
            load_stage_collaborators("")

        assert "STAGE_COLLABORATORS" in str(exc_info.value)

    @pytest.mark.parametrize(
        "import_path",
        ["trendcast_missing_module:build", f"{MODULE}:missing", f"{MODULE}:wrong"],
    )
    def test_invalid_path(self, deploy_module, import_path):
        """Test unusable paths are reported with the configured value."""
        with pytest.raises(CollaboratorsNotConfiguredError) as exc_info:
            load_stage_collaborators(import_path)

        assert exc_info.value.import_path == import_path
