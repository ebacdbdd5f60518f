import shutil
from pathlib import Path

import pytest

from embedderer.config import Config
from embedderer.details.console import Console
from embedderer.xcode.parser import parse_project

DATA_DIR = Path(__file__).parent / "data"
SAMPLE_PROJECT_FILE = DATA_DIR / "Sample.xcodeproj" / "project.pbxproj"

# Identifiers used in the sample project
PROJECT_ID = "1A0000000000000000000001"
FOO_FILE_REF_ID = "1A0000000000000000000012"
LIBZ_FILE_REF_ID = "1A0000000000000000000013"
FOO_BUILD_FILE_ID = "1A0000000000000000000021"
FRAMEWORKS_PHASE_ID = "1A0000000000000000000031"
SCRIPT_PHASE_ID = "1A0000000000000000000032"
EMBED_PHASE_ID = "1A0000000000000000000033"
TARGET_ID = "1A0000000000000000000040"
TARGET_DEBUG_ID = "1A0000000000000000000062"
TARGET_RELEASE_ID = "1A0000000000000000000063"


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_PROJECT_FILE.read_text(encoding="utf-8")


@pytest.fixture
def sample_project(sample_text):
    return parse_project(sample_text)


@pytest.fixture
def sample_dir(tmp_path) -> Path:
    """A writable copy of the sample project inside a source checkout."""
    root = tmp_path / "checkout"
    shutil.copytree(DATA_DIR / "Sample.xcodeproj", root / "Sample.xcodeproj")
    return root


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def console() -> Console:
    return Console(debug=True)
