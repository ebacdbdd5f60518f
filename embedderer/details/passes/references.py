from embedderer.config import Config
from embedderer.details.console import Console
from embedderer.xcode.model import PBXProject, SourceTree

# Path token of a reference relative to the build products directory
BUILD_PRODUCTS_TOKEN = SourceTree.BUILT_PRODUCTS_DIR.value


def retarget_references(project: PBXProject, config: Config, console: Console) -> bool:
    """
    Point file references inside the build directory at the build products directory.

    The reference keeps its display name: its name (or, without one, its original
    path) is stored as the name once the path has been replaced.

    Args:
        project: The project whose main group is walked.
        config: Provides the dependency build directory.
        console: Receives a debug note for every retargeted reference.

    Returns:
        True if a reference was changed.
    """
    main_group = project.main_group
    if main_group is None:
        return False

    changed = False
    for file_ref in main_group.full_file_refs:
        path = file_ref.path
        if path is None or config.build_dir not in path:
            continue
        if file_ref.source_tree == SourceTree.BUILT_PRODUCTS_DIR:
            continue
        name = file_ref.name or path
        file_ref.set("sourceTree", SourceTree.BUILT_PRODUCTS_DIR.value)
        file_ref.set("path", BUILD_PRODUCTS_TOKEN)
        file_ref.set("name", name)
        changed = True
        console.debug(f"{name} path changed to {BUILD_PRODUCTS_TOKEN}")
    return changed
