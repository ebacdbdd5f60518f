from pathlib import Path
from typing import Optional, Union


class EmbeddererError(Exception):
    pass


class ProjectNotFoundError(EmbeddererError):
    def __init__(self, root: Union[str, Path]):
        super().__init__(f"cannot find Xcode project in {root}")
        self.root = root


class ProjectReadError(EmbeddererError):
    def __init__(self, path: Union[str, Path], cause: Exception):
        super().__init__(f"cannot read {path}: {cause}")
        self.path = path
        self.cause = cause


class DecodeError(EmbeddererError):
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.line = line
        self.column = column


class EncodeError(EmbeddererError):
    pass


class ProjectWriteError(EmbeddererError):
    def __init__(self, path: Union[str, Path], cause: Union[Exception, str]):
        super().__init__(f"cannot save {path}: {cause}")
        self.path = path
        self.cause = cause
