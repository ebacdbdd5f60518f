import os
from pathlib import Path
from typing import Iterator, Optional, Tuple

from embedderer.errors import ProjectNotFoundError

PROJECT_EXTENSION = ".xcodeproj"
PROJECT_DATA_FILENAME = "project.pbxproj"


def generate_projects(root: Path, skip_dirs: Tuple[str, ...] = ()) -> Iterator[Path]:
    # Shallowest first, alphabetical within a level
    level = [root]
    while level:
        next_level = []
        for directory in level:
            try:
                entries = sorted(os.scandir(directory), key=lambda e: e.name)
            except OSError:
                continue
            for entry in entries:
                if not entry.is_dir() or entry.name.startswith((".", "__")):
                    continue
                if entry.name.endswith(PROJECT_EXTENSION):
                    if (Path(entry.path) / PROJECT_DATA_FILENAME).is_file():
                        yield Path(entry.path)
                elif entry.name not in skip_dirs:
                    next_level.append(Path(entry.path))
        level = next_level


def find_project(path: Path, skip_dirs: Tuple[str, ...] = ()) -> Optional[Path]:
    return next(generate_projects(path, skip_dirs), None)


def locate_project(path, build_dir: str = "") -> Tuple[Path, Path]:
    """
    Work out the project root and the project.pbxproj file for a path.

    Args:
        path: A .xcodeproj bundle, a project.pbxproj file, or a directory
            containing an Xcode project somewhere below it.
        build_dir: Dependency build directory; its top folder is not searched.

    Returns:
        A (root, project_file) tuple.

    Raises:
        ProjectNotFoundError: If no project can be found.
    """
    path = Path(path)
    if path.name == PROJECT_DATA_FILENAME:
        if not path.is_file():
            raise ProjectNotFoundError(path)
        return path.parent.parent, path
    if path.suffix == PROJECT_EXTENSION:
        if not (path / PROJECT_DATA_FILENAME).is_file():
            raise ProjectNotFoundError(path)
        return path.parent, path / PROJECT_DATA_FILENAME
    if not path.is_dir():
        raise ProjectNotFoundError(path)
    skip_dirs = tuple(part for part in Path(build_dir).parts[:1])
    project_dir = find_project(path, skip_dirs)
    if project_dir is None:
        raise ProjectNotFoundError(path)
    return path, project_dir / PROJECT_DATA_FILENAME
