from typing import List

from embedderer.config import Config
from embedderer.details.console import Console
from embedderer.xcode.model import (
    BuildFileAttribute,
    FileType,
    PBXBuildFile,
    PBXCopyFilesBuildPhase,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXTarget,
)
from embedderer.xcode.store import allocate_id

EMBED_ATTRIBUTES = [
    BuildFileAttribute.CODE_SIGN_ON_COPY.value,
    BuildFileAttribute.REMOVE_HEADERS_ON_COPY.value,
]


def embed_phases(target: PBXTarget, name: str) -> List[PBXCopyFilesBuildPhase]:
    return [
        phase
        for phase in target.build_phases
        if isinstance(phase, PBXCopyFilesBuildPhase) and phase.name == name
    ]


def linked_build_files(target: PBXTarget) -> List[PBXBuildFile]:
    return [
        build_file
        for phase in target.build_phases
        if isinstance(phase, PBXFrameworksBuildPhase)
        for build_file in phase.files
        if isinstance(build_file, PBXBuildFile)
    ]


def is_embedded(phase: PBXCopyFilesBuildPhase, file_ref: PBXFileReference) -> bool:
    return any(
        isinstance(build_file, PBXBuildFile) and build_file.get("fileRef") == file_ref.id
        for build_file in phase.files
    )


def embed_frameworks(target: PBXTarget, config: Config, console: Console) -> bool:
    """
    Add every linked dynamic framework of a target to its Embed Frameworks phase.

    Args:
        target: The target to update.
        config: Provides the name of the embed phase.
        console: Receives a debug note for every embedded framework.

    Returns:
        True if a build file was added.
    """
    objects = target.objects
    changed = False
    for phase in embed_phases(target, config.embed_phase_name):
        for linked_file in linked_build_files(target):
            file_ref = linked_file.file_ref
            if not isinstance(file_ref, PBXFileReference):
                continue
            if file_ref.file_type != FileType.FRAMEWORK.value:
                continue
            if is_embedded(phase, file_ref):
                continue
            new_id = allocate_id(objects)
            embed_file = PBXBuildFile.create(
                new_id,
                fileRef=file_ref.id,
                settings={"ATTRIBUTES": list(EMBED_ATTRIBUTES)},
            )
            embed_file.attach(objects)
            phase.add("files", embed_file)
            changed = True
            console.debug(f"Embed framework {file_ref.display_name} with ref {new_id}")
    return changed
