from embedderer.config import Config
from embedderer.details.console import Console
from embedderer.xcode.model import PBXTarget

FRAMEWORK_SEARCH_PATHS = "FRAMEWORK_SEARCH_PATHS"


def clean_search_paths(target: PBXTarget, config: Config, console: Console) -> bool:
    config_list = target.build_configuration_list
    if config_list is None:
        return False

    prefix = config.search_path_prefix
    changed = False
    for build_configuration in config_list.build_configurations:
        build_settings = build_configuration.build_settings
        if not isinstance(build_settings, dict):
            continue
        search_paths = build_settings.get(FRAMEWORK_SEARCH_PATHS)
        # a single string value is left as is
        if not isinstance(search_paths, list):
            continue
        kept = [
            path
            for path in search_paths
            if not (isinstance(path, str) and path.startswith(prefix))
        ]
        if len(kept) == len(search_paths):
            continue
        build_settings[FRAMEWORK_SEARCH_PATHS] = kept
        changed = True
        name = build_configuration.name or build_configuration.description
        console.debug(f"{FRAMEWORK_SEARCH_PATHS} edited for configuration {name}")
    return changed
