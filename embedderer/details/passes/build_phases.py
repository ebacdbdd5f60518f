from embedderer.config import Config
from embedderer.details.console import Console
from embedderer.xcode.model import PBXShellScriptBuildPhase, PBXTarget


def references_build_dir(phase: PBXShellScriptBuildPhase, build_dir: str) -> bool:
    return any(build_dir in path for path in phase.input_paths)


def prune_build_phases(target: PBXTarget, config: Config, console: Console) -> bool:
    """
    Remove the script phases that copy frameworks out of the build directory.

    Args:
        target: The target to clean.
        config: Provides the dependency build directory.
        console: Receives a debug note for every removed phase.

    Returns:
        True if a phase was removed.
    """
    changed = False
    for phase in target.build_phases:
        if not isinstance(phase, PBXShellScriptBuildPhase):
            continue
        if not references_build_dir(phase, config.build_dir):
            continue
        target.remove("buildPhases", phase)
        # the phase owns its build files
        for build_file in phase.files:
            build_file.detach()
        phase.detach()
        changed = True
        console.debug(f"Build script phase {phase.name or ''} removed")
    return changed
