import os
import tempfile
from pathlib import Path
from typing import Optional

from embedderer.errors import DecodeError, EncodeError, ProjectReadError, ProjectWriteError
from embedderer.xcode.formatter import format_xcode_project
from embedderer.xcode.model import XcodeProject
from embedderer.xcode.parser import parse_project


def load_project(project_file: Path) -> XcodeProject:
    try:
        with open(project_file, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ProjectReadError(project_file, e)
    except UnicodeDecodeError as e:
        raise DecodeError(f"{project_file} is not UTF-8: {e}")
    return parse_project(text)


def save_project(
    project: XcodeProject, project_file: Path, name: Optional[str] = None
) -> None:
    try:
        project_str = format_xcode_project(project, name)
    except EncodeError as e:
        raise ProjectWriteError(project_file, e)

    # Written beside the target, then swapped in
    project_file = Path(project_file)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{project_file.name}.", dir=project_file.parent
        )
    except OSError as e:
        raise ProjectWriteError(project_file, e)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(project_str)
        if project_file.exists():
            os.chmod(tmp_name, project_file.stat().st_mode & 0o777)
        os.replace(tmp_name, project_file)
    except OSError as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ProjectWriteError(project_file, e)
