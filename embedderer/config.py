DEFAULT_BUILD_DIR = "Carthage/Build"
DEFAULT_EMBED_PHASE_NAME = "Embed Frameworks"


class Config:
    def __init__(
        self,
        build_dir: str = DEFAULT_BUILD_DIR,
        embed_phase_name: str = DEFAULT_EMBED_PHASE_NAME,
        debug: bool = False,
        **kwargs
    ):
        self.build_dir = build_dir
        self.embed_phase_name = embed_phase_name
        self.debug = debug
        self.__dict__.update(kwargs)

    @property
    def search_path_prefix(self) -> str:
        return f"$(PROJECT_DIR)/{self.build_dir}"
