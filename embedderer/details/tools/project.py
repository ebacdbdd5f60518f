import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from embedderer.config import Config
from embedderer.details.console import Console
from embedderer.details.locate import locate_project
from embedderer.details.passes.build_phases import prune_build_phases
from embedderer.details.passes.embed import embed_frameworks
from embedderer.details.passes.references import retarget_references
from embedderer.details.passes.search_paths import clean_search_paths
from embedderer.errors import EmbeddererError, ProjectWriteError
from embedderer.xcode import load_project, save_project
from embedderer.xcode.model import XcodeProject
from embedderer.xcode.validator import dangling_references, new_dangling


class Outcome(enum.Enum):
    SAVED = "saved"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class Result:
    outcome: Outcome
    message: str


def apply_passes(project: XcodeProject, config: Config, console: Console) -> bool:
    pbx_project = project.project
    has_change = False
    for target in pbx_project.targets:
        has_change |= prune_build_phases(target, config, console)
        has_change |= clean_search_paths(target, config, console)
    has_change |= retarget_references(pbx_project, config, console)
    for target in pbx_project.targets:
        has_change |= embed_frameworks(target, config, console)
    return has_change


def clean_and_embed(path: Union[str, Path], config: Config, console: Console) -> Result:
    """
    Remove the dependency copy step artifacts from a project and embed its frameworks.

    Args:
        path: A .xcodeproj bundle, its project.pbxproj file, or a directory to search.
        config: Build directory and embed phase settings.
        console: Reporting channel.

    Returns:
        The outcome; failures have already been reported on the console.
    """
    try:
        _, project_file = locate_project(path, config.build_dir)
        project = load_project(project_file)
        dangling_before = dangling_references(project)
        if not apply_passes(project, config, console):
            console.debug("Nothing to change")
            return Result(Outcome.UNCHANGED, "Nothing to change")
        if errors := new_dangling(dangling_before, dangling_references(project)):
            raise ProjectWriteError(project_file, f"invalid project: {errors}")
        save_project(project, project_file, project_file.parent.stem)
    except EmbeddererError as e:
        console.error(str(e))
        return Result(Outcome.FAILED, str(e))
    console.info("Project saved")
    return Result(Outcome.SAVED, f"Project saved to {project_file}")


def project_main(config: Config, path: str) -> int:
    console = Console(debug=config.debug)
    result = clean_and_embed(path, config, console)
    return 1 if result.outcome == Outcome.FAILED else 0
