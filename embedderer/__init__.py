from embedderer.config import Config
from embedderer.errors import (
    EmbeddererError,
    ProjectNotFoundError,
    ProjectReadError,
    DecodeError,
    EncodeError,
    ProjectWriteError,
)
