import json
from pathlib import Path

import pytest

from initializr_metadata.catalog import load_metadata


METADATA_FILE = Path(__file__).resolve().parents[1] / "examples" / "metadata.json"


@pytest.fixture
def metadata_document():
    with open(METADATA_FILE, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def metadata(metadata_document):
    return load_metadata(metadata_document)


@pytest.fixture
def catalog(metadata):
    return metadata.catalog
