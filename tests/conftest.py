from __future__ import annotations

import pytest
from click.testing import CliRunner

from tests.helpers.fake_document import RecordingDocument, RecordingLoader


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()


@pytest.fixture
def document() -> RecordingDocument:
    """Three-frame document that records every backend call."""

    return RecordingDocument(frames=3)


@pytest.fixture
def loader(document: RecordingDocument) -> RecordingLoader:
    return RecordingLoader(document)
