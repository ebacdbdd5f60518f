from embedderer.config import Config
from embedderer.details.console import Console
from embedderer.details.locate import locate_project
from embedderer.errors import EmbeddererError
from embedderer.xcode import load_project
from embedderer.xcode.validator import validate_references


def validate_main(config: Config, path: str) -> int:
    console = Console(debug=config.debug)
    try:
        _, project_file = locate_project(path, config.build_dir)
        project = load_project(project_file)
    except EmbeddererError as e:
        console.error(str(e))
        return 1
    errors = validate_references(project)
    for error in errors:
        console.error(error)
    if errors:
        return 1
    console.debug(f"{len(project.objects)} objects checked")
    console.info(f"{project_file} is valid")
    return 0
